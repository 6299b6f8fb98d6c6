"""
Duplicate Correlation Service - Flags fingerprint groups that look like one
crash reported several times, and whether any of those reports is still open.

Matching is exact structural equality of fingerprints plus two thresholds
(linked issue count and signature strength). Crash reports that differ only in
incidental text, such as file paths or line numbers inside the message, land in
different groups and are not reported.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence

from dto.FingerprintGroup import DuplicateSignal, FingerprintGroup
from dto.Issue import RawIssue

logger = logging.getLogger(__name__)

EXACT_MATCH_WARNING = (
    "Duplicate detection uses exact fingerprint equality only; crashes whose "
    "reports differ in paths or line numbers are not recognised as duplicates."
)


def index_issues_by_number(issues: Iterable[RawIssue]) -> Dict[int, RawIssue]:
    """
    Build a number -> issue lookup.

    If the snapshot holds the same number twice the last record wins.
    """
    issues_by_number: Dict[int, RawIssue] = {}
    for issue in issues:
        if issue.number in issues_by_number:
            logger.warning(f"Issue #{issue.number} appears more than once; keeping the last record")
        issues_by_number[issue.number] = issue
    return issues_by_number


class DuplicateCorrelationService:
    """Joins fingerprint groups with the current issue state."""

    def __init__(self, min_linked_issues: int = 2, accept_panic_message: bool = False):
        """
        Args:
            min_linked_issues: Minimum distinct issues a group must link (at least 2)
            accept_panic_message: Let a panic message stand in for a missing ICE
                message when judging signature strength
        """
        if min_linked_issues < 2:
            raise ValueError(f"min_linked_issues must be at least 2, got {min_linked_issues}")
        self.min_linked_issues = min_linked_issues
        self.accept_panic_message = accept_panic_message

    @classmethod
    def from_config(cls, config) -> "DuplicateCorrelationService":
        return cls(
            min_linked_issues=int(config.MIN_LINKED_ISSUES),
            accept_panic_message=bool(config.ACCEPT_PANIC_MESSAGE),
        )

    def is_candidate(self, group: FingerprintGroup) -> bool:
        """Enough linked issues and a strong signature."""
        return (
            len(group.issues) >= self.min_linked_issues
            and group.fingerprint.has_strong_signature(self.accept_panic_message)
        )

    def correlate(
        self,
        groups: Sequence[FingerprintGroup],
        issues_by_number: Mapping[int, RawIssue],
    ) -> List[DuplicateSignal]:
        """
        Produce a signal for every candidate group, in input order.

        Issue numbers missing from ``issues_by_number`` are logged and counted
        as not open; the two stores may have been captured at different times.
        """
        logger.warning(EXACT_MATCH_WARNING)

        signals: List[DuplicateSignal] = []
        for group in groups:
            if not self.is_candidate(group):
                continue

            open_issues = []
            unresolved_issues = []
            for number in group.issues:
                issue = issues_by_number.get(number)
                if issue is None:
                    logger.warning(
                        f"Fingerprint group references issue #{number}, "
                        f"which is not in the current issue snapshot"
                    )
                    unresolved_issues.append(number)
                elif issue.is_open:
                    open_issues.append(number)

            signal = DuplicateSignal(
                group=group,
                any_open=bool(open_issues),
                open_issues=tuple(open_issues),
                unresolved_issues=tuple(unresolved_issues),
            )
            logger.debug(f"Duplicate group {list(group.issues)}: any_open={signal.any_open}")
            signals.append(signal)

        logger.info(
            f"Found {len(signals)} duplicate groups among {len(groups)} fingerprint groups "
            f"({sum(1 for s in signals if s.any_open)} with open issues)"
        )
        return signals


def correlate(
    groups: Sequence[FingerprintGroup],
    issues_by_number: Mapping[int, RawIssue],
) -> List[DuplicateSignal]:
    """Correlate groups with issue state using default thresholds."""
    return DuplicateCorrelationService().correlate(groups, issues_by_number)
