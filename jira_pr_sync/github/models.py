"""Canonical records for pull request state read from GitHub."""

from typing import Sequence

from pydantic import BaseModel, ConfigDict

from jira_pr_sync.synchronize.types import HasName, LabelType


class PullRequestLabel(BaseModel):
    """Pydantic model for a label attached to a pull request."""

    model_config = ConfigDict(frozen=True)

    name: str

    @classmethod
    def from_github(cls, label: LabelType) -> "PullRequestLabel | None":
        """Resolve any GitHub label shape into a label record.

        githubkit returns issue labels as either plain strings or label
        objects; both are accepted, as are dicts. Labels without a usable
        name resolve to None.
        """
        if isinstance(label, str):
            name = label
        elif isinstance(label, dict):
            name = label.get("name")
        elif isinstance(label, HasName):
            name = label.name
        else:
            name = None
        if not isinstance(name, str) or not name:
            return None
        return cls(name=name)


class PullRequestState(BaseModel):
    """Pydantic model for the parts of a pull request that are synchronized."""

    number: int
    labels: list[PullRequestLabel] = []
    body: str = ""

    @classmethod
    def from_github(cls, number: int, labels: Sequence[LabelType] | None, body: str | None) -> "PullRequestState":
        """Build pull request state from raw GitHub label and body values."""
        resolved = [PullRequestLabel.from_github(label) for label in labels or []]
        return cls(number=number, labels=[label for label in resolved if label is not None], body=body or "")

    @property
    def label_names(self) -> list[str]:
        """Names of every label currently on the pull request."""
        return [label.name for label in self.labels]
