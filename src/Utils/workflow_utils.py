"""
Common utilities for the icedb pipeline stages.
"""

from enum import Enum

from dto.FingerprintGroup import DuplicateSignal


class PipelineStage(Enum):
    """
    Enumeration of the pipeline stages, in the order they run.

    The value is the sub-command name used on the command line.
    """

    FETCH_ISSUES = "fetch-issues"
    BUILD_FINGERPRINTS = "build-fingerprints"
    FIND_DUPLICATES = "find-duplicates"

    @classmethod
    def get_all_stage_names(cls):
        return [member.value for member in cls]


def format_duplicate_signal(signal: DuplicateSignal) -> str:
    """
    One-line human readable summary of a duplicate group.
    """
    fingerprint = signal.group.fingerprint
    issues = ", ".join(f"#{number}" for number in signal.group.issues)
    status = "OPEN" if signal.any_open else "closed"
    message = fingerprint.ice_message or fingerprint.panic_message or ""
    summary = f"[{status}] {issues}: {message}"
    if signal.unresolved_issues:
        missing = ", ".join(f"#{number}" for number in signal.unresolved_issues)
        summary += f" (not in issue snapshot: {missing})"
    return summary
