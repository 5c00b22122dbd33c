"""Pydantic models for the subset of a Jira issue that is mirrored onto pull requests."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JiraModel(BaseModel):
    """Base model for read-only Jira payload fragments."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class IssueTypeModel(JiraModel):
    """Pydantic model for a Jira issue type."""

    name: str | None = None
    icon_url: str | None = Field(default=None, alias="iconUrl")
    description: str | None = None


class PriorityModel(JiraModel):
    """Pydantic model for a Jira priority."""

    name: str | None = None
    icon_url: str | None = Field(default=None, alias="iconUrl")


class FixVersionModel(JiraModel):
    """Pydantic model for a Jira fix version."""

    name: str


class IssueSnapshot(JiraModel):
    """Issue fields as read from Jira once at the start of a run.

    Every sync operation in a run works from the same snapshot so that the
    labels and description reflect a single, consistent view of the issue.
    """

    key: str
    summary: str = ""
    issue_type: IssueTypeModel | None = None
    priority: PriorityModel | None = None
    labels: tuple[str, ...] = ()
    fix_versions: tuple[FixVersionModel, ...] = ()

    @classmethod
    def from_jira_payload(cls, payload: dict[str, Any]) -> "IssueSnapshot":
        """Build a snapshot from a Jira REST `GET /issue/{key}` response."""
        fields = payload.get("fields") or {}
        return cls(
            key=payload["key"],
            summary=fields.get("summary") or "",
            issue_type=fields.get("issuetype"),
            priority=fields.get("priority"),
            labels=tuple(fields.get("labels") or ()),
            fix_versions=tuple(fields.get("fixVersions") or ()),
        )

    @property
    def issue_type_name(self) -> str | None:
        """Name of the issue type, if the issue has one."""
        return self.issue_type.name if self.issue_type else None

    @property
    def priority_name(self) -> str | None:
        """Name of the priority, if the issue has one."""
        return self.priority.name if self.priority else None

    @property
    def fix_version_names(self) -> list[str]:
        """Names of the fix versions, in the order Jira returned them."""
        return [fix_version.name for fix_version in self.fix_versions]
