"""Custom exceptions for the synchronize module."""


class ExtractionError(Exception):
    """Raised when no Jira issue key can be found in the pull request."""

    def __init__(self, location: str) -> None:
        super().__init__(f"No Jira issue key was found in: {location}")
        self.location = location


class MissingFieldError(Exception):
    """Raised when the Jira issue lacks a field required by an enabled sync operation."""

    def __init__(self, issue_key: str, field_name: str) -> None:
        super().__init__(f"Jira issue {issue_key} did not have a {field_name}")
        self.issue_key = issue_key
        self.field_name = field_name


class RunTimeoutError(Exception):
    """Raised when a run does not complete within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Run did not complete within {timeout} seconds")
        self.timeout = timeout


class OperationsFailedError(Exception):
    """Raised when one or more independent sync operations failed.

    Successful operations have already written their changes by the time this
    is raised; only the failed ones are listed.
    """

    def __init__(self, failures: dict[str, Exception]) -> None:
        details = "; ".join(f"{operation}: {error}" for operation, error in failures.items())
        super().__init__(f"{len(failures)} sync operation(s) failed - {details}")
        self.failures = failures
