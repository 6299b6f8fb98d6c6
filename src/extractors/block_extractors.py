"""
Extractors for fields spanning several report lines.
"""

import logging
from typing import List, Optional, Tuple

from common.crash_patterns import BACKTRACE_RX, LINE_BREAK_RX, QUERY_STACK_RX, VERSION_RX
from dto.Fingerprint import RustcVersion
from extractors.base_extractor import FieldExtractor

logger = logging.getLogger(__name__)


def _split_lines(block: str) -> List[str]:
    """Split a captured block on LF or CRLF, dropping the trailing empty piece."""
    lines = LINE_BREAK_RX.split(block)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class BacktraceExtractor(FieldExtractor):
    """
    Frame lines following ``stack backtrace:``, each trimmed.
    """

    field_name = "backtrace"

    def extract(self, body: str) -> Optional[Tuple[str, ...]]:
        match = BACKTRACE_RX.search(body)
        if not match:
            return None
        frames = [line.strip() for line in _split_lines(match.group("frames"))]
        return tuple(frame for frame in frames if frame)


class QueryStackExtractor(FieldExtractor):
    """
    Lines between ``query stack during panic:`` and ``end of query stack``.

    Lines are kept verbatim and repeated frames are not collapsed: rustc
    prints the stack once per panicking thread and the repetition is part
    of the signature.
    """

    field_name = "query_stack"

    def extract(self, body: str) -> Optional[Tuple[str, ...]]:
        match = QUERY_STACK_RX.search(body)
        if not match:
            return None
        return tuple(_split_lines(match.group("stack")))


class VersionExtractor(FieldExtractor):
    """
    The ``rustc --version --verbose`` block.
    """

    field_name = "version"

    def extract(self, body: str) -> Optional[RustcVersion]:
        match = VERSION_RX.search(body)
        if not match:
            return None
        version = RustcVersion(
            commit_hash=match.group("commit_hash"),
            commit_date=match.group("commit_date"),
            host=match.group("host"),
            release=match.group("release"),
            llvm_version=match.group("llvm_version"),
        )
        logger.debug(f"Matched rustc {version.release} ({version.host})")
        return version
