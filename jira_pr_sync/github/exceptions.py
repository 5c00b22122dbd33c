"""Custom exceptions for the GitHub client adapter."""


class PlatformRequestError(Exception):
    """Raised when a GitHub REST call to read or modify a pull request fails."""

    def __init__(self, operation: str, pull_request_number: int, message: str, status_code: int | None = None) -> None:
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"GitHub request '{operation}' failed for pull request #{pull_request_number}{detail}: {message}")
        self.operation = operation
        self.pull_request_number = pull_request_number
        self.status_code = status_code
