"""Custom exceptions for the Jira client."""


class JiraRequestError(Exception):
    """Raised when fetching an issue from Jira fails."""

    def __init__(self, issue_key: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.issue_key = issue_key
        self.status_code = status_code
