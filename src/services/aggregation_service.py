"""
Aggregation Service - Groups issues by exact fingerprint equality.

Every issue body is run through the fingerprint extractor; issues whose
fingerprint carries no evidence are dropped, the rest are grouped by
structurally equal fingerprints. Output is sorted at both levels (groups by
fingerprint order, issue numbers ascending) so any permutation of the same
input produces the same result.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Set

from FingerprintExtractor import FingerprintExtractor
from dto.Fingerprint import Fingerprint
from dto.FingerprintGroup import FingerprintGroup
from dto.Issue import RawIssue

logger = logging.getLogger(__name__)


class AggregationService:
    """Builds fingerprint groups from a snapshot of issues."""

    def __init__(
        self,
        extractor: Optional[FingerprintExtractor] = None,
        workers: int = 1,
        expected_label: Optional[str] = None,
    ):
        """
        Initialize aggregation service.

        Args:
            extractor: Fingerprint extractor to use (a new one if None)
            workers: Number of threads used for extraction
            expected_label: Label every input issue should carry; issues without
                it are still processed but logged
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.extractor = extractor or FingerprintExtractor()
        self.workers = workers
        self.expected_label = expected_label

    @classmethod
    def from_config(cls, config) -> "AggregationService":
        return cls(
            workers=int(config.EXTRACTION_WORKERS),
            expected_label=config.ISSUE_LABEL or None,
        )

    def extract_all(self, issues: Sequence[RawIssue]) -> List[Fingerprint]:
        """Extract one fingerprint per issue, in input order."""
        bodies = [issue.body for issue in issues]
        if self.workers == 1 or len(bodies) < 2:
            return [self.extractor.extract(body) for body in bodies]

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            return list(executor.map(self.extractor.extract, bodies))

    def aggregate(self, issues: Sequence[RawIssue]) -> List[FingerprintGroup]:
        """
        Group issue numbers by fingerprint.

        Args:
            issues: Fully materialised issue snapshot

        Returns:
            Groups sorted by fingerprint, each with ascending issue numbers
        """
        fingerprints = self.extract_all(issues)

        issues_by_fingerprint: Dict[Fingerprint, Set[int]] = defaultdict(set)
        dropped = 0
        for issue, fingerprint in zip(issues, fingerprints):
            if self.expected_label and not issue.has_label(self.expected_label):
                logger.warning(f"Issue #{issue.number} is missing the {self.expected_label} label")

            if fingerprint.is_empty():
                logger.debug(f"Issue #{issue.number}: no crash markers found, skipping")
                dropped += 1
                continue

            issues_by_fingerprint[fingerprint].add(issue.number)

        groups = [
            FingerprintGroup(fingerprint=fingerprint, issues=tuple(sorted(numbers)))
            for fingerprint, numbers in issues_by_fingerprint.items()
        ]
        groups.sort(key=lambda group: group.fingerprint.sort_key())

        logger.info(
            f"Aggregated {len(issues)} issues into {len(groups)} fingerprint groups "
            f"({dropped} issues without crash markers)"
        )
        return groups


def aggregate(issues: Sequence[RawIssue]) -> List[FingerprintGroup]:
    """Group issues by fingerprint with default settings."""
    return AggregationService().aggregate(issues)
