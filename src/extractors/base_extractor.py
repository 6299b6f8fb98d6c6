from abc import ABC, abstractmethod
from typing import Any, Optional


class FieldExtractor(ABC):
    """
    Abstract base class for fingerprint field extractors.
    Each fingerprint field (message, query stack, version, etc.) is produced by
    exactly one extractor that looks at the whole issue body on its own.
    """

    # Name of the Fingerprint field this extractor fills.
    field_name: str = ""

    @abstractmethod
    def extract(self, body: str) -> Optional[Any]:
        """
        Extract this extractor's field from a crash report body.

        Args:
            body: The full issue body text

        Returns:
            The field value, or None when the report does not contain the
            marker this extractor is anchored to
        """
        pass
