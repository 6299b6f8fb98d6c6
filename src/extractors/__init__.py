"""
Fingerprint field extractors.

One extractor per Fingerprint field, each anchored to a literal marker from
rustc's crash output:

- ice_message:   ``error: internal compiler error: ...``
- panic_message: ``thread 'rustc' panicked at '...'``
- backtrace:     ``stack backtrace:`` block
- flags:         ``note: compiler flags: ...``
- query_stack:   ``query stack during panic:`` ... ``end of query stack``
- version:       ``rustc --version --verbose`` block

Usage:
    from FingerprintExtractor import extract_fingerprint

    fingerprint = extract_fingerprint(issue.body)
"""

from .base_extractor import FieldExtractor
from .block_extractors import BacktraceExtractor, QueryStackExtractor, VersionExtractor
from .line_extractors import FlagsExtractor, IceMessageExtractor, PanicMessageExtractor

__all__ = [
    "FieldExtractor",
    "BacktraceExtractor",
    "FlagsExtractor",
    "IceMessageExtractor",
    "PanicMessageExtractor",
    "QueryStackExtractor",
    "VersionExtractor",
]
