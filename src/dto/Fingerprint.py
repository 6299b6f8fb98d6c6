"""
Crash fingerprint records.

A Fingerprint is the canonical signature extracted from one crash report.
Every field is optional; two fingerprints are duplicates only when every
field is equal. Ordering is explicit (see ``sort_key``) so persisted output
never depends on hash or insertion order.
"""

from functools import total_ordering
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict

# Declaration order of the fingerprint fields; also the comparison order.
FINGERPRINT_FIELDS = (
    "backtrace",
    "flags",
    "ice_message",
    "panic_message",
    "query_stack",
    "version",
)


@total_ordering
class RustcVersion(BaseModel):
    """Information printed by ``rustc --version --verbose``."""

    model_config = ConfigDict(frozen=True)

    commit_hash: str
    commit_date: str
    host: str
    release: str
    llvm_version: str

    def sort_key(self) -> Tuple[str, ...]:
        return (self.commit_hash, self.commit_date, self.host, self.release, self.llvm_version)

    def __lt__(self, other):
        if not isinstance(other, RustcVersion):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@total_ordering
class Fingerprint(BaseModel):
    """
    Structured crash signature extracted from an issue body.

    Absent fields are None. An empty tuple is a present-but-empty sequence and
    is kept distinct from absence through serialization.
    """

    model_config = ConfigDict(frozen=True)

    backtrace: Optional[Tuple[str, ...]] = None
    flags: Optional[Tuple[str, ...]] = None
    ice_message: Optional[str] = None
    panic_message: Optional[str] = None
    query_stack: Optional[Tuple[str, ...]] = None
    version: Optional[RustcVersion] = None

    def is_empty(self) -> bool:
        """True when no matcher contributed a value."""
        return all(getattr(self, name) is None for name in FINGERPRINT_FIELDS)

    def has_message(self, accept_panic_message: bool = False) -> bool:
        if self.ice_message is not None:
            return True
        return accept_panic_message and self.panic_message is not None

    def has_strong_signature(self, accept_panic_message: bool = False) -> bool:
        """
        A message together with a query stack.

        Message-only or stack-only matches are shared by too many unrelated
        crashes to count as duplicate evidence.
        """
        return self.has_message(accept_panic_message) and self.query_stack is not None

    def sort_key(self) -> Tuple[Tuple[Any, ...], ...]:
        """
        Lexicographic key over the fields in declaration order.

        Absent sorts before present; sequences compare element-wise.
        """
        key = []
        for name in FINGERPRINT_FIELDS:
            value = getattr(self, name)
            if value is None:
                key.append((0,))
            elif isinstance(value, RustcVersion):
                key.append((1, value.sort_key()))
            else:
                key.append((1, value))
        return tuple(key)

    def __lt__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return self.sort_key() < other.sort_key()
