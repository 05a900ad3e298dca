"""Configuration for GitHub Actions provider."""

from pydantic import BaseModel, SecretStr


class GitHubActionsConfig(BaseModel):
    """Configuration for GitHub Actions provider."""

    token: SecretStr
    api_base_url: str = "https://api.github.com"
