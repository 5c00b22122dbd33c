"""Fixtures for unit tests."""

from typing import Generator

import pytest
import structlog

from jira_pr_sync.github.abc import PullRequestHostBase
from jira_pr_sync.github.models import PullRequestState
from jira_pr_sync.jira.models import IssueSnapshot


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakePullRequestHost(PullRequestHostBase):
    """In-memory pull request that records every request made against it."""

    def __init__(self, labels: list[str] | None = None, body: str = "") -> None:
        self.labels = list(labels or [])
        self.body = body
        self.reads = 0
        self.add_calls: list[list[str]] = []
        self.remove_calls: list[str] = []
        self.body_updates: list[str] = []
        self.failing_removals: dict[str, Exception] = {}
        self.add_error: Exception | None = None
        self.update_error: Exception | None = None

    async def get_pull_request_state(self, pull_request_number: int) -> PullRequestState:
        self.reads += 1
        return PullRequestState.from_github(pull_request_number, list(self.labels), self.body)

    async def add_labels(self, pull_request_number: int, labels: list[str]) -> None:
        self.add_calls.append(list(labels))
        if self.add_error is not None:
            raise self.add_error
        self.labels.extend(label for label in labels if label not in self.labels)

    async def remove_label(self, pull_request_number: int, label: str) -> None:
        self.remove_calls.append(label)
        if label in self.failing_removals:
            raise self.failing_removals[label]
        self.labels = [existing for existing in self.labels if existing != label]

    async def update_pull_request_body(self, pull_request_number: int, body: str) -> None:
        if self.update_error is not None:
            raise self.update_error
        self.body_updates.append(body)
        self.body = body


@pytest.fixture
def fake_pull_request_host() -> FakePullRequestHost:
    """An empty in-memory pull request."""
    return FakePullRequestHost()


@pytest.fixture
def jira_payload() -> dict:
    """A Jira REST response for an issue with every synced field populated."""
    return {
        "id": "10001",
        "key": "ABC-123",
        "self": "https://example.atlassian.net/rest/api/2/issue/10001",
        "fields": {
            "summary": "Login button does nothing",
            "issuetype": {
                "id": "1",
                "name": "Bug",
                "iconUrl": "https://example.atlassian.net/images/icons/bug.svg",
                "description": "A problem which impairs or prevents the functions of the product.",
                "subtask": False,
            },
            "priority": {
                "id": "2",
                "name": "High",
                "iconUrl": "https://example.atlassian.net/images/icons/priorities/high.svg",
            },
            "labels": ["backend", "login"],
            "fixVersions": [
                {"id": "100", "name": "1.2.0", "archived": False, "released": False},
                {"id": "101", "name": "1.3.0", "archived": False, "released": False},
            ],
        },
    }


@pytest.fixture
def issue_snapshot(jira_payload: dict) -> IssueSnapshot:
    """A snapshot of an issue with every synced field populated."""
    return IssueSnapshot.from_jira_payload(jira_payload)
