"""Configuration for the issue checklist webhook."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitHub credentials
    github_webhook_secret: str = Field(
        ..., min_length=1, description="Webhook secret for signature verification"
    )
    github_token: str = Field(..., min_length=1, description="Token used for GitHub API calls")

    # Only items added to this project are processed
    project_node_id: str = Field(..., min_length=1, description="Target Projects v2 node ID")

    # Optional: GitHub Enterprise
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    github_graphql_url: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Listen port")

    # App settings
    app_name: str = Field(default="Issue Checklist Webhook", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="production", description="Environment name")

    checklist_file: str = Field(
        default="checklist.md",
        description="Path to the checklist template appended to new issues",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for outbound GitHub requests",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
