"""Shared schemas and constants for the issue checklist webhook."""

from shared.schemas import (
    ChecklistTemplate,
    FilterDecision,
    IssueDetails,
    IssueLookupResult,
    IssueRef,
    IssueUpdateResult,
    SkipReason,
    UpdateStatus,
)
from shared.constants import (
    CHECKLIST_SEPARATOR,
    CREATED_ACTION,
    ISSUE_NODE_QUERY,
    SIGNATURE_HEADER,
    SIGNATURE_PREFIX,
)

__all__ = [
    "ChecklistTemplate",
    "FilterDecision",
    "IssueDetails",
    "IssueLookupResult",
    "IssueRef",
    "IssueUpdateResult",
    "SkipReason",
    "UpdateStatus",
    "CHECKLIST_SEPARATOR",
    "CREATED_ACTION",
    "ISSUE_NODE_QUERY",
    "SIGNATURE_HEADER",
    "SIGNATURE_PREFIX",
]
