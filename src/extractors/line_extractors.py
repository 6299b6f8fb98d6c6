"""
Extractors for fields that live on a single report line.
"""

from typing import Optional, Tuple

from common.crash_patterns import FLAGS_RX, ICE_MESSAGE_RX, PANIC_MESSAGE_RX
from extractors.base_extractor import FieldExtractor


class IceMessageExtractor(FieldExtractor):
    """
    Text after ``error: internal compiler error: <path>:<line>:<col>: ``.
    """

    field_name = "ice_message"

    def extract(self, body: str) -> Optional[str]:
        match = ICE_MESSAGE_RX.search(body)
        if not match:
            return None
        return match.group("message")


class PanicMessageExtractor(FieldExtractor):
    """
    Quoted payload of ``thread 'rustc' panicked at '<message>', <location>``.
    Escape sequences inside the quotes are kept as written.
    """

    field_name = "panic_message"

    def extract(self, body: str) -> Optional[str]:
        match = PANIC_MESSAGE_RX.search(body)
        if not match:
            return None
        return match.group("message")


class FlagsExtractor(FieldExtractor):
    """
    Tokens of the ``note: compiler flags:`` line, split on single spaces.
    """

    field_name = "flags"

    def extract(self, body: str) -> Optional[Tuple[str, ...]]:
        match = FLAGS_RX.search(body)
        if not match:
            return None
        # Order matters and repeated flags are kept.
        return tuple(match.group("flags").split(" "))
