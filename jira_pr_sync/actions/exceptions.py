"""Custom exceptions for interacting with the GitHub Actions runner."""


class PullRequestContextError(Exception):
    """Raised when the triggering event does not describe a pull request."""

    pass
