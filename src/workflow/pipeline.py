"""
Pipeline stages. Each stage reads its inputs through the record store, runs
the core, and persists its outputs. Errors propagate to the caller; nothing is
written unless the stage has completed.
"""

import logging
from typing import List, Optional

import requests

from common.config import Config
from dto.FingerprintGroup import DuplicateSignal, FingerprintGroup
from dto.Issue import RawIssue
from services.aggregation_service import AggregationService
from services.duplicate_correlation_service import (
    DuplicateCorrelationService,
    index_issues_by_number,
)
from services.github_issue_service import GitHubIssueClient
from services.record_store_service import (
    read_fingerprint_groups,
    read_issues,
    write_duplicate_signals,
    write_fingerprint_groups,
    write_issues,
)
from Utils.workflow_utils import format_duplicate_signal

logger = logging.getLogger(__name__)


def fetch_issues(config: Config, session: Optional[requests.Session] = None) -> List[RawIssue]:
    """
    Download every labeled issue and replace the issues file.

    Args:
        config: Pipeline configuration
        session: HTTP session to use; a new one is created (and closed) if None
    """
    config.validate()

    if session is None:
        with requests.Session() as own_session:
            issues = _fetch(config, own_session)
    else:
        issues = _fetch(config, session)

    write_issues(config.ISSUES_FILE_PATH, issues)
    return issues


def _fetch(config: Config, session: requests.Session) -> List[RawIssue]:
    client = GitHubIssueClient.from_config(config, session)
    return client.fetch_raw_issues(config.GITHUB_REPO, config.ISSUE_LABEL)


def build_fingerprints(config: Config) -> List[FingerprintGroup]:
    """Extract fingerprints from the issues file and replace the fingerprints file."""
    config.validate()

    issues = read_issues(config.ISSUES_FILE_PATH)
    groups = AggregationService.from_config(config).aggregate(issues)
    write_fingerprint_groups(config.FINGERPRINTS_FILE_PATH, groups)
    return groups


def find_duplicates(config: Config) -> List[DuplicateSignal]:
    """
    Correlate persisted fingerprint groups with the issue snapshot.

    Signals are logged; when DUPLICATES_FILE_PATH is set they are also written
    there as JSON lines.
    """
    config.validate()

    groups = read_fingerprint_groups(config.FINGERPRINTS_FILE_PATH)
    issues_by_number = index_issues_by_number(read_issues(config.ISSUES_FILE_PATH))

    signals = DuplicateCorrelationService.from_config(config).correlate(groups, issues_by_number)
    for signal in signals:
        logger.info(format_duplicate_signal(signal))

    if config.DUPLICATES_FILE_PATH:
        write_duplicate_signals(config.DUPLICATES_FILE_PATH, signals)
    return signals
