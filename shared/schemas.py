"""Pydantic schemas for webhook processing.

Every value here lives only for the duration of one webhook delivery.
Operations that talk to GitHub return the ``*Result`` models instead of
raising, so the caller decides what to log and whether to continue.
"""

from enum import Enum

from pydantic import BaseModel, Field


class SkipReason(str, Enum):
    """Why a verified event was not acted upon."""

    PROJECT_MISMATCH = "project_mismatch"
    ACTION_NOT_CREATED = "action_not_created"
    MISSING_CONTENT_NODE_ID = "missing_content_node_id"


class UpdateStatus(str, Enum):
    """Outcome of an issue update attempt."""

    UPDATED = "updated"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"


class FilterDecision(BaseModel):
    """Result of filtering a projects_v2_item event."""

    proceed: bool
    reason: SkipReason | None = None
    content_node_id: str | None = None

    @classmethod
    def skip(cls, reason: SkipReason) -> "FilterDecision":
        return cls(proceed=False, reason=reason)

    @classmethod
    def accept(cls, content_node_id: str) -> "FilterDecision":
        return cls(proceed=True, content_node_id=content_node_id)


class IssueDetails(BaseModel):
    """Issue location and body resolved from a content node ID."""

    url: str
    body: str | None = None


class IssueLookupResult(BaseModel):
    """Result of resolving a content node ID.

    ``issue`` is None both when the lookup failed (``error`` is set) and
    when the node exists but is not an issue.
    """

    issue: IssueDetails | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class IssueRef(BaseModel):
    """Owner, repository and number identifying an issue."""

    owner: str
    repo: str
    number: int = Field(gt=0)

    @property
    def api_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues/{self.number}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class ChecklistTemplate(BaseModel):
    """Checklist text; its first line marks an issue as already handled."""

    first_line: str
    full_content: str


class IssueUpdateResult(BaseModel):
    """Result of an issue update attempt."""

    status: UpdateStatus
    issue: IssueRef | None = None
    error: str | None = None
