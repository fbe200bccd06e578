"""Filtering of projects_v2_item webhook events."""

from typing import Any

from shared.constants import CREATED_ACTION
from shared.schemas import FilterDecision, SkipReason


def filter_project_item_event(payload: dict[str, Any], project_node_id: str) -> FilterDecision:
    """Decide whether a verified payload should get a checklist.

    Checks run in a fixed order: target project, then action, then the
    presence of the linked content.

    Args:
        payload: Verified webhook payload
        project_node_id: Node ID of the project being watched

    Returns:
        FilterDecision carrying the content node ID when proceeding
    """
    item = payload.get("projects_v2_item")
    if not isinstance(item, dict):
        item = {}

    if item.get("project_node_id") != project_node_id:
        return FilterDecision.skip(SkipReason.PROJECT_MISMATCH)

    if payload.get("action") != CREATED_ACTION:
        return FilterDecision.skip(SkipReason.ACTION_NOT_CREATED)

    content_node_id = item.get("content_node_id")
    if not content_node_id:
        return FilterDecision.skip(SkipReason.MISSING_CONTENT_NODE_ID)

    return FilterDecision.accept(content_node_id)
