"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod

from jira_pr_sync.github.models import PullRequestState


class PullRequestHostBase(ABC):
    """Base ABC for the code host operations needed to sync a pull request."""

    @abstractmethod
    async def get_pull_request_state(self, pull_request_number: int) -> PullRequestState:
        """Get the current labels and body of a pull request."""
        pass

    @abstractmethod
    async def add_labels(self, pull_request_number: int, labels: list[str]) -> None:
        """Add labels to a pull request in a single request."""
        pass

    @abstractmethod
    async def remove_label(self, pull_request_number: int, label: str) -> None:
        """Remove a single label from a pull request."""
        pass

    @abstractmethod
    async def update_pull_request_body(self, pull_request_number: int, body: str) -> None:
        """Replace the body of a pull request."""
        pass
