"""Shared fixtures: test settings and a fake GitHub behind httpx.MockTransport."""

import hashlib
import hmac
import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.github_client import GitHubClient
from app.main import app, get_github_client

TEST_SECRET = "test-secret"
TEST_TOKEN = "test-token"
TEST_PROJECT_ID = "PVT_kwDOAtarget"
TEST_CONTENT_ID = "I_kwDOAissue7"
TEST_ISSUE_URL = "https://github.com/acme/widgets/issues/7"
TEST_ISSUE_API_PATH = "/repos/acme/widgets/issues/7"

CHECKLIST_CONTENT = "## Checklist\n- [ ] Step 1"


def sign_body(body: bytes, secret: str = TEST_SECRET) -> str:
    """Generate webhook signature for a raw body."""
    signature = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return f"sha256={signature}"


class FakeGitHub:
    """In-memory GitHub answering the issue node query and issue REST calls."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.issue_url = TEST_ISSUE_URL
        self.issue_body: str | None = "Hello"
        self.graphql_errors: list[dict[str, Any]] | None = None
        self.graphql_status = 200
        self.node_is_issue = True
        self.get_status = 200
        self.patch_status = 200
        self.patched_bodies: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/graphql":
            if self.graphql_status != 200:
                return httpx.Response(self.graphql_status, json={"message": "Bad credentials"})
            if self.graphql_errors:
                return httpx.Response(200, json={"data": {"node": None}, "errors": self.graphql_errors})
            node = {"url": self.issue_url, "body": self.issue_body} if self.node_is_issue else {}
            return httpx.Response(200, json={"data": {"node": node}})

        if request.url.path == TEST_ISSUE_API_PATH:
            if request.method == "GET":
                if self.get_status != 200:
                    return httpx.Response(self.get_status, json={"message": "Not Found"})
                return httpx.Response(200, json={"number": 7, "body": self.issue_body})
            if request.method == "PATCH":
                if self.patch_status != 200:
                    return httpx.Response(
                        self.patch_status, json={"message": "Resource not accessible by integration"}
                    )
                body = json.loads(request.content)["body"]
                self.patched_bodies.append(body)
                self.issue_body = body
                return httpx.Response(200, json={"number": 7, "body": body})

        return httpx.Response(404, json={"message": "Not Found"})

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    @property
    def rest_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != "/graphql"]


@pytest.fixture
def checklist_file(tmp_path):
    """Write the checklist template to a temporary file."""
    path = tmp_path / "checklist.md"
    path.write_text(CHECKLIST_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
def settings(checklist_file):
    """Create test settings."""
    return Settings(
        github_webhook_secret=TEST_SECRET,
        github_token=TEST_TOKEN,
        project_node_id=TEST_PROJECT_ID,
        checklist_file=str(checklist_file),
        _env_file=None,
    )


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def github(settings, fake_github):
    """GitHub client wired to the fake GitHub."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_github.handler))
    return GitHubClient(settings, http)


@pytest.fixture
def client(settings, github):
    """Create test client with settings and GitHub client overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_github_client] = lambda: github
    yield TestClient(app)
    app.dependency_overrides.clear()
