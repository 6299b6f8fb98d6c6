"""
GitHub issue client.

Fetches every issue (open and closed) carrying a label, following the
``Link`` pagination header. The HTTP session is created and owned by the
caller; this module keeps no process-wide client or cache.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

import requests
from pydantic import ValidationError

from common.exceptions import IssueTrackerError
from dto.Issue import RawIssue

logger = logging.getLogger(__name__)

GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
ISSUES_PER_PAGE = 100


class GitHubIssueClient:
    """Read-only client for the GitHub issues API."""

    def __init__(
        self,
        session: requests.Session,
        token: str,
        api_url: str = "https://api.github.com",
        user_agent: str = "icedb",
        page_delay_seconds: float = 5,
        timeout: float = 30,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the client.

        Args:
            session: HTTP session used for every request (owned by the caller)
            token: GitHub token sent as a bearer token
            api_url: Base URL of the GitHub REST API
            user_agent: User-Agent header value
            page_delay_seconds: Pause between page requests to stay under rate limits
            timeout: Per-request timeout in seconds
            sleep: Function used to pause between pages
        """
        self.session = session
        self.api_url = api_url.rstrip("/")
        self.page_delay_seconds = page_delay_seconds
        self.timeout = timeout
        self._sleep = sleep
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": user_agent,
        }

    @classmethod
    def from_config(cls, config, session: requests.Session) -> "GitHubIssueClient":
        return cls(
            session=session,
            token=config.require_github_token(),
            api_url=config.GITHUB_API_URL,
            user_agent=config.GITHUB_USER_AGENT,
            page_delay_seconds=float(config.GITHUB_PAGE_DELAY_SECONDS),
            timeout=float(config.GITHUB_REQUEST_TIMEOUT_SECONDS),
        )

    def get_labeled_issues(self, repo: str, label: str) -> List[Dict[str, Any]]:
        """
        Fetch the raw JSON objects of every issue in ``repo`` carrying ``label``.

        Args:
            repo: Repository in ``owner/name`` form
            label: Label name to filter on

        Returns:
            Issue payloads in the order GitHub returned them

        Raises:
            IssueTrackerError: If any page request fails
        """
        url = f"{self.api_url}/repos/{repo}/issues"
        params = {"state": "all", "labels": label, "per_page": ISSUES_PER_PAGE}

        logger.info(f"Fetching issues labeled {label} from {repo}")
        response = self._get(url, params)
        issues = self._issue_objects(response)

        last_page = self._last_page(response)
        for page in range(2, last_page + 1):
            # Make sure we don't run into rate limiting...
            self._sleep(self.page_delay_seconds)
            logger.debug(f"Fetching page {page}/{last_page}")
            response = self._get(url, dict(params, page=page))
            issues.extend(self._issue_objects(response))

        logger.info(f"Fetched {len(issues)} issues from {max(last_page, 1)} page(s)")
        return issues

    def fetch_raw_issues(self, repo: str, label: str) -> List[RawIssue]:
        """Fetch labeled issues and validate them into RawIssue records."""
        raw_issues = []
        for payload in self.get_labeled_issues(repo, label):
            try:
                raw_issues.append(RawIssue.model_validate(payload))
            except ValidationError as e:
                raise IssueTrackerError(
                    f"{self.api_url}/repos/{repo}/issues",
                    f"unexpected issue payload (number={payload.get('number')}): {e}",
                )
        return raw_issues

    def _get(self, url: str, params: Dict[str, Any]) -> requests.Response:
        try:
            response = self.session.get(
                url, params=params, headers=self._headers, timeout=self.timeout
            )
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise IssueTrackerError(url, str(e), status_code=status_code)
        except requests.exceptions.Timeout:
            raise IssueTrackerError(url, f"timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            raise IssueTrackerError(url, str(e))

    def _issue_objects(self, response: requests.Response) -> List[Dict[str, Any]]:
        try:
            payload = response.json()
        except ValueError as e:
            raise IssueTrackerError(response.url, f"response is not JSON: {e}")

        if not isinstance(payload, list):
            raise IssueTrackerError(response.url, "expected a JSON array of issues")

        issues = []
        for item in payload:
            if isinstance(item, dict):
                issues.append(item)
            else:
                logger.warning(f"Skipping issue entry that is not an object: {item!r}")
        return issues

    @staticmethod
    def _last_page(response: requests.Response) -> int:
        """Page number of the ``rel="last"`` link, or 1 when there is a single page."""
        last_link: Optional[Dict[str, str]] = response.links.get("last")
        if not last_link or "url" not in last_link:
            return 1

        pages = parse_qs(urlparse(last_link["url"]).query).get("page")
        if not pages:
            return 1
        try:
            return int(pages[0])
        except ValueError:
            logger.warning(f"Could not parse last page from link: {last_link['url']}")
            return 1
