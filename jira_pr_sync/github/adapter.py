"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import GitHub, Response
from githubkit.auth import TokenAuthStrategy
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Issue

from jira_pr_sync.utils.helpers import split_repository_in_configuration
from jira_pr_sync.utils.retry import retry_on_rate_limit

from .abc import PullRequestHostBase
from .client import get_github_token_client
from .exceptions import PlatformRequestError
from .models import PullRequestState

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_request_failed(func: F) -> F:
    """Decorator to log failed GitHub requests and raise them as PlatformRequestError."""

    @wraps(func)
    async def wrapper(self: "GitHubKitAdapter", pull_request_number: int, *args: Any, **kwargs: Any) -> Any:
        try:
            return await func(self, pull_request_number, *args, **kwargs)
        except RequestFailed as exc:
            try:
                error_data = exc.response.json()
            except Exception:
                error_data = {}
            message = error_data.get("message", str(exc)) if isinstance(error_data, dict) else str(exc)
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                pull_request_number=pull_request_number,
                message=message,
                url=getattr(exc.response, "url", None),
                status_code=exc.response.status_code,
            )
            raise PlatformRequestError(func.__name__, pull_request_number, message, exc.response.status_code) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(PullRequestHostBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHub[TokenAuthStrategy], owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, repo: str, github_token: str, github_api_url: str = "https://api.github.com") -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token used to authenticate (typically the workflow's GITHUB_TOKEN)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_token_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    # Pull requests share the issues API for labels and body, which also
    # returns labels in a lighter shape than the pulls API.
    @handle_github_request_failed
    @retry_on_rate_limit()
    async def get_pull_request_state(self, pull_request_number: int) -> PullRequestState:
        """Get the current labels and body of a pull request."""
        response: Response[Issue] = await self.client.rest.issues.async_get(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=pull_request_number,
        )
        issue = response.parsed_data
        return PullRequestState.from_github(pull_request_number, issue.labels, issue.body)

    @handle_github_request_failed
    @retry_on_rate_limit()
    async def add_labels(self, pull_request_number: int, labels: list[str]) -> None:
        """Add labels to a pull request in a single request."""
        await self.client.rest.issues.async_add_labels(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=pull_request_number,
            labels=labels,
        )

    @handle_github_request_failed
    @retry_on_rate_limit()
    async def remove_label(self, pull_request_number: int, label: str) -> None:
        """Remove a single label from a pull request.

        A label that is already absent is not an error.
        """
        try:
            await self.client.rest.issues.async_remove_label(
                owner=self.owner,
                repo=self.repo_name,
                issue_number=pull_request_number,
                name=label,
            )
        except RequestFailed as exc:
            if exc.response.status_code != 404:
                raise
            logger.info("Label was already absent from pull request", pull_request_number=pull_request_number, label=label)

    @handle_github_request_failed
    @retry_on_rate_limit()
    async def update_pull_request_body(self, pull_request_number: int, body: str) -> None:
        """Replace the body of a pull request."""
        await self.client.rest.issues.async_update(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=pull_request_number,
            body=body,
        )
