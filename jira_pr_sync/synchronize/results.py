"""Contains results of application execution."""

from jira_pr_sync.jira.models import IssueSnapshot


class LabelSyncResult:
    """Contains results of synchronizing one category of labels."""

    def __init__(
        self,
        prefix: str,
        additions: list[str],
        removals: list[str],
        failed_removals: dict[str, Exception] | None = None,
    ) -> None:
        """Initialize the result with the labels added, removed, and any removals that failed."""
        self.prefix = prefix
        self.additions = additions
        self.removals = removals
        self.failed_removals = failed_removals or {}


class OperationResult:
    """Contains the outcome of a single independent sync operation."""

    def __init__(self, operation: str, label_sync_result: LabelSyncResult | None = None, error: Exception | None = None) -> None:
        """Initialize the result with the operation name and either its result or its error."""
        self.operation = operation
        self.label_sync_result = label_sync_result
        self.error = error

    @property
    def succeeded(self) -> bool:
        """Whether the operation completed without raising."""
        return self.error is None


class JiraSyncResult:
    """Contains results of a jira-pr-sync run."""

    def __init__(self, issue_key: str, snapshot: IssueSnapshot, operation_results: list[OperationResult]) -> None:
        """Initialize the result with the issue that was synced and per-operation results."""
        self.issue_key = issue_key
        self.snapshot = snapshot
        self.operation_results = operation_results

    @property
    def errors(self) -> dict[str, Exception]:
        """Errors of failed operations, keyed by operation name."""
        return {result.operation: result.error for result in self.operation_results if result.error is not None}
