"""FastAPI application for the issue checklist webhook.

Receives GitHub projects_v2_item webhooks and appends a checklist to issues
newly added to the configured project.
"""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

from app.config import Settings, get_settings
from app.events import filter_project_item_event
from app.github_client import GitHubClient
from app.issues import resolve_issue, update_issue
from app.webhook import get_verified_payload
from shared.constants import (
    ACCEPTED_TEXT,
    ACTION_NOT_CREATED_TEXT,
    DELIVERY_HEADER,
    EVENT_HEADER,
    MISSING_CONTENT_TEXT,
    PROJECT_MISMATCH_TEXT,
    ROOT_TEXT,
)
from shared.schemas import SkipReason, UpdateStatus

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

SKIP_RESPONSES = {
    SkipReason.PROJECT_MISMATCH: PROJECT_MISMATCH_TEXT,
    SkipReason.ACTION_NOT_CREATED: ACTION_NOT_CREATED_TEXT,
    SkipReason.MISSING_CONTENT_NODE_ID: MISSING_CONTENT_TEXT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Fails startup when a required variable is missing
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"Environment: {settings.environment}")

    async with httpx.AsyncClient(timeout=settings.request_timeout) as http:
        app.state.github = GitHubClient(settings, http)
        yield

    logger.info("Shutting down")


app = FastAPI(
    title="Issue Checklist Webhook",
    description="Appends a checklist to issues added to a GitHub project",
    version="1.0.0",
    lifespan=lifespan,
)


def get_github_client(request: Request) -> GitHubClient:
    """Return the process-wide GitHub client created at startup."""
    return request.app.state.github


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness endpoint."""
    logger.info("GET /")
    return ROOT_TEXT


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


async def process_project_item(
    github: GitHubClient, settings: Settings, content_node_id: str
) -> None:
    """Resolve the item's issue and append the checklist.

    Runs after the webhook has been answered, so failures are only logged.

    Args:
        github: GitHub API client
        settings: Application settings
        content_node_id: Node ID of the project item's content
    """
    try:
        lookup = await resolve_issue(github, content_node_id)
        if not lookup.ok:
            logger.error(f"Error fetching issue details: {lookup.error}")
            logger.info("Could not fetch issue details")
            return
        if lookup.issue is None:
            logger.info(f"Content {content_node_id} is not an issue; could not fetch issue details")
            return

        logger.info(f"Issue URL: {lookup.issue.url}")

        result = await update_issue(github, settings, lookup.issue.url)
        if result.status == UpdateStatus.UPDATED:
            logger.info(f"Issue {result.issue} updated successfully with checklist!")
        elif result.status == UpdateStatus.ALREADY_PRESENT:
            logger.info(f"Checklist already exists in the body of {result.issue}, not updating.")
        else:
            logger.error(f"Error updating the issue {lookup.issue.url}: {result.error}")

    except Exception as e:
        logger.error(f"Error processing project item {content_node_id}: {e}", exc_info=True)


@app.post("/webhook")
async def webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    github: GitHubClient = Depends(get_github_client),
):
    """Handle GitHub webhook events.

    Verifies the signature, filters the event and schedules the issue update.
    Every verified delivery is answered with 200, whatever the outcome.
    """
    try:
        payload = await get_verified_payload(request, settings)
    except HTTPException as e:
        return PlainTextResponse(str(e.detail), status_code=e.status_code)

    event_type = request.headers.get(EVENT_HEADER, "unknown")
    delivery_id = request.headers.get(DELIVERY_HEADER, "unknown")

    logger.info(f"Received webhook: {event_type} (delivery: {delivery_id})")

    # Handle ping event (sent when webhook is first configured)
    if event_type == "ping":
        zen = payload.get("zen", "")
        hook_id = payload.get("hook_id", "")
        logger.info(f"Webhook ping received: {zen} (hook_id: {hook_id})")
        return {"status": "pong", "zen": zen}

    decision = filter_project_item_event(payload, settings.project_node_id)
    if not decision.proceed:
        if decision.reason == SkipReason.PROJECT_MISMATCH:
            item = payload.get("projects_v2_item")
            project_node_id = item.get("project_node_id") if isinstance(item, dict) else None
            logger.info(f"project_node_id does not match. No action taken. ({project_node_id})")
        elif decision.reason == SkipReason.ACTION_NOT_CREATED:
            logger.info(
                f"No action taken because the action is not 'created': {payload.get('action')}"
            )
        else:
            logger.warning("content_node_id not found in the webhook payload")
        return PlainTextResponse(SKIP_RESPONSES[decision.reason])

    logger.info(f"Found content_node_id: {decision.content_node_id}")

    # Process in background to return quickly
    background_tasks.add_task(process_project_item, github, settings, decision.content_node_id)
    return PlainTextResponse(ACCEPTED_TEXT)


def run():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    log_level = settings.log_level.lower()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=log_level,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
