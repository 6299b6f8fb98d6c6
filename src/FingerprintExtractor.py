from typing import List, Optional

from dto.Fingerprint import FINGERPRINT_FIELDS, Fingerprint
from extractors.base_extractor import FieldExtractor
from extractors.block_extractors import BacktraceExtractor, QueryStackExtractor, VersionExtractor
from extractors.line_extractors import FlagsExtractor, IceMessageExtractor, PanicMessageExtractor


class FingerprintExtractor:
    """
    Runs the fixed battery of field extractors over an issue body.
    """

    def __init__(self):
        # One extractor per Fingerprint field, in declaration order
        self._extractors: List[FieldExtractor] = [
            BacktraceExtractor(),
            FlagsExtractor(),
            IceMessageExtractor(),
            PanicMessageExtractor(),
            QueryStackExtractor(),
            VersionExtractor(),
        ]
        field_names = tuple(e.field_name for e in self._extractors)
        if field_names != FINGERPRINT_FIELDS:
            raise RuntimeError(
                f"Extractors {field_names} do not match Fingerprint fields {FINGERPRINT_FIELDS}"
            )

    def extract(self, body: Optional[str]) -> Fingerprint:
        """
        Build the fingerprint of one crash report.

        Never fails: a field whose marker is missing from the body is left
        absent rather than raising.

        Args:
            body: Issue body text; None is treated as an empty body

        Returns:
            Fingerprint: The extracted record, possibly with every field absent
        """
        text = body or ""
        fields = {extractor.field_name: extractor.extract(text) for extractor in self._extractors}
        return Fingerprint(**fields)


# Extractors are stateless, so one instance is shared by all callers
_fingerprint_extractor = FingerprintExtractor()


def extract_fingerprint(body: Optional[str]) -> Fingerprint:
    """
    Extract the crash fingerprint from an issue body.

    Args:
        body: Issue body text (may be None for issues without a description)

    Returns:
        Fingerprint: Structured crash signature
    """
    return _fingerprint_extractor.extract(body)
