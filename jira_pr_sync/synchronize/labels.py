"""Contains the label diff logic used to reconcile one category of pull request labels."""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from jira_pr_sync.synchronize.types import LabelType
from jira_pr_sync.synchronize.utils import extract_label_names, label_has_prefix, render_prefixed_label

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass
class LabelDiff:
    """Labels to add to and remove from a pull request for a single category."""

    to_add: set[str] = field(default_factory=set)
    to_remove: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """Whether the pull request is already in sync for this category."""
        return not self.to_add and not self.to_remove


def compute_label_diff(prefix: str, desired_values: Iterable[str], current_labels: Sequence[LabelType]) -> LabelDiff:
    """Compare desired label values against the labels on a pull request.

    Only labels whose name starts with the prefix (ignoring case) are
    considered, so labels of other categories and unrelated labels are never
    added or removed. An empty list of desired values clears the category.
    """
    proposed = {render_prefixed_label(prefix, value) for value in desired_values}
    existing_of_category = {label for label in extract_label_names(current_labels) if label_has_prefix(label, prefix)}

    diff = LabelDiff(
        to_add=proposed - existing_of_category,
        to_remove=existing_of_category - proposed,
    )
    logger.debug(
        "Computed label diff",
        prefix=prefix,
        current=sorted(existing_of_category),
        to_add=sorted(diff.to_add),
        to_remove=sorted(diff.to_remove),
    )
    return diff
