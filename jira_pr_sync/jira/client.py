"""Read-only Jira REST client built on httpx."""

from types import TracebackType
from typing import Any, Self

import httpx
import structlog

from jira_pr_sync.jira.exceptions import JiraRequestError
from jira_pr_sync.jira.models import IssueSnapshot
from jira_pr_sync.utils.constants import JIRA_API_VERSION, JIRA_ISSUE_FIELDS
from jira_pr_sync.utils.retry import retry_on_rate_limit

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class JiraClient:
    """Fetches issue fields from a Jira instance."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        """Initialize the Jira client with an already-configured httpx client."""
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    @classmethod
    def create(cls, base_url: str, username: str, api_token: str, timeout: float = 30.0) -> Self:
        """Create a Jira client authenticating with a username and API token."""
        base_url = base_url.rstrip("/")
        logger.info("Creating client for Jira instance", jira_base_url=base_url)
        http_client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(username, api_token),
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
        return cls(http_client, base_url)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self.http_client.aclose()

    @retry_on_rate_limit()
    async def _get_issue_payload(self, issue_key: str) -> dict[str, Any]:
        response = await self.http_client.get(
            f"/rest/api/{JIRA_API_VERSION}/issue/{issue_key}",
            params={"fields": ",".join(JIRA_ISSUE_FIELDS)},
        )
        response.raise_for_status()
        return response.json()

    async def find_issue(self, issue_key: str) -> IssueSnapshot:
        """Fetch the synced fields of a single issue.

        Raises:
            JiraRequestError: If the issue does not exist, the credentials are
                rejected, or Jira cannot be reached.
        """
        logger.info("Fetching Jira issue", issue_key=issue_key, fields=JIRA_ISSUE_FIELDS)
        try:
            payload = await self._get_issue_payload(issue_key)
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 404:
                message = f"Jira issue {issue_key} was not found or is not visible to the configured user"
            elif status_code in (401, 403):
                message = f"Jira rejected the configured credentials while fetching {issue_key} (HTTP {status_code})"
            else:
                message = f"Failed to fetch Jira issue {issue_key} (HTTP {status_code})"
            logger.error("Jira request failed", issue_key=issue_key, status_code=status_code, url=str(exc.request.url))
            raise JiraRequestError(issue_key, message, status_code) from exc
        except httpx.HTTPError as exc:
            logger.error("Jira request failed", issue_key=issue_key, error=str(exc))
            raise JiraRequestError(issue_key, f"Failed to fetch Jira issue {issue_key}: {exc}") from exc

        snapshot = IssueSnapshot.from_jira_payload(payload)
        logger.debug(
            "Fetched Jira issue",
            issue_key=snapshot.key,
            summary=snapshot.summary,
            issue_type=snapshot.issue_type_name,
            priority=snapshot.priority_name,
            labels=list(snapshot.labels),
            fix_versions=snapshot.fix_version_names,
        )
        return snapshot
