"""Issue resolution and checklist updates."""

import logging
import re
from urllib.parse import urlsplit

import httpx

from app.checklist import ChecklistError, append_checklist, has_checklist, load_checklist
from app.config import Settings
from app.github_client import GitHubClient
from shared.schemas import (
    IssueDetails,
    IssueLookupResult,
    IssueRef,
    IssueUpdateResult,
    UpdateStatus,
)

logger = logging.getLogger(__name__)

# REST form (/repos/o/r/issues/1) or the HTML form GraphQL returns (/o/r/issues/1)
ISSUE_PATH_RE = re.compile(
    r"^/(?:repos/)?(?P<owner>[^/]+)/(?P<repo>[^/]+)/issues/(?P<number>\d+)/?$"
)


class IssueUrlError(ValueError):
    """Raised when an issue URL does not have the expected shape."""


def parse_issue_url(url: str) -> IssueRef:
    """Extract owner, repository and number from an issue URL.

    Args:
        url: ``https://api.github.com/repos/{owner}/{repo}/issues/{number}``
            or ``https://github.com/{owner}/{repo}/issues/{number}``

    Returns:
        IssueRef for the issue

    Raises:
        IssueUrlError: If the URL does not address a single issue
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise IssueUrlError(f"Not an absolute HTTP URL: {url!r}")

    match = ISSUE_PATH_RE.match(parts.path)
    if not match:
        raise IssueUrlError(f"Unexpected issue URL path: {url!r}")

    number = int(match.group("number"))
    if number <= 0:
        raise IssueUrlError(f"Invalid issue number in URL: {url!r}")

    return IssueRef(owner=match.group("owner"), repo=match.group("repo"), number=number)


def describe_http_error(error: httpx.HTTPError) -> str:
    """Build a log-friendly description of an HTTP failure.

    Includes the status code and response body when GitHub answered.
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"{response.status_code} {response.reason_phrase}: {response.text}"
    return f"{type(error).__name__}: {error}"


async def resolve_issue(github: GitHubClient, content_node_id: str) -> IssueLookupResult:
    """Resolve a project item's content node ID to an issue.

    Args:
        github: GitHub API client
        content_node_id: Node ID of the item's linked content

    Returns:
        IssueLookupResult with the issue, with no issue when the node is not
        an issue, or with an error message
    """
    try:
        data = await github.query_issue_node(content_node_id)
    except httpx.HTTPError as e:
        return IssueLookupResult(error=f"GraphQL request failed: {describe_http_error(e)}")
    except ValueError as e:
        return IssueLookupResult(error=f"GraphQL response is not valid JSON: {e}")

    if not isinstance(data, dict):
        return IssueLookupResult(error="GraphQL response is not a JSON object")

    errors = data.get("errors")
    if errors:
        return IssueLookupResult(error=f"GraphQL errors: {errors}")

    node = (data.get("data") or {}).get("node")
    # Non-issue nodes come back as an empty object from the inline fragment
    if not node or not node.get("url"):
        return IssueLookupResult()

    return IssueLookupResult(issue=IssueDetails(url=node["url"], body=node.get("body")))


async def update_issue(github: GitHubClient, settings: Settings, issue_url: str) -> IssueUpdateResult:
    """Append the checklist to an issue unless it is already there.

    The body is re-read over REST right before writing. There is no locking:
    two concurrent deliveries for the same issue can both append.

    Args:
        github: GitHub API client
        settings: Application settings (checklist location)
        issue_url: Issue URL as returned by the resolver

    Returns:
        IssueUpdateResult describing what happened
    """
    try:
        ref = parse_issue_url(issue_url)
    except IssueUrlError as e:
        return IssueUpdateResult(status=UpdateStatus.FAILED, error=str(e))

    logger.info(f"Updating issue at: {github.issue_url(ref.api_path)}")

    try:
        issue_data = await github.get_issue(ref.api_path)
        if not isinstance(issue_data, dict):
            return IssueUpdateResult(
                status=UpdateStatus.FAILED,
                issue=ref,
                error="Unexpected GitHub response: issue is not a JSON object",
            )
        existing_body = issue_data.get("body") or ""

        checklist = load_checklist(settings.checklist_file)
        if has_checklist(existing_body, checklist):
            return IssueUpdateResult(status=UpdateStatus.ALREADY_PRESENT, issue=ref)

        await github.update_issue_body(ref.api_path, append_checklist(existing_body, checklist))
    except httpx.HTTPError as e:
        return IssueUpdateResult(
            status=UpdateStatus.FAILED, issue=ref, error=describe_http_error(e)
        )
    except ChecklistError as e:
        return IssueUpdateResult(status=UpdateStatus.FAILED, issue=ref, error=str(e))
    except ValueError as e:
        return IssueUpdateResult(
            status=UpdateStatus.FAILED, issue=ref, error=f"Unexpected GitHub response: {e}"
        )

    return IssueUpdateResult(status=UpdateStatus.UPDATED, issue=ref)
