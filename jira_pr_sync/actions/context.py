"""Reads the pull request that triggered the workflow from the event payload."""

import json
from dataclasses import dataclass
from pathlib import Path

import structlog

from jira_pr_sync.actions.exceptions import PullRequestContextError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PullRequestContext:
    """The pull request fields needed to locate a Jira issue key."""

    number: int
    title: str
    branch_name: str


def load_pull_request_context(event_path: Path | None, head_ref: str | None = None) -> PullRequestContext:
    """Load the triggering pull request from the GitHub event payload file.

    Raises:
        PullRequestContextError: If the event payload is missing or the event
            is not a pull request event.
    """
    if event_path is None:
        raise PullRequestContextError("GITHUB_EVENT_PATH is not set - this action must run in a GitHub Actions workflow")
    try:
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError as exc:
        raise PullRequestContextError(f"GitHub event payload not found: {event_path}") from exc
    except json.JSONDecodeError as exc:
        raise PullRequestContextError(f"GitHub event payload is not valid JSON: {event_path}") from exc

    pull_request = payload.get("pull_request") or {}
    number = pull_request.get("number")
    if not number:
        raise PullRequestContextError("No PR number was found in the GitHub context")

    branch_name = (pull_request.get("head") or {}).get("ref") or head_ref or ""
    context = PullRequestContext(number=int(number), title=pull_request.get("title") or "", branch_name=branch_name)
    logger.info("Loaded pull request from event payload", pull_request_number=context.number, title=context.title, branch_name=branch_name)
    return context
