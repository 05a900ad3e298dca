"""GitHub Actions provider module."""

from ci_gate_action.providers.github_actions.config import GitHubActionsConfig
from ci_gate_action.providers.github_actions.provider import GitHubActionsProvider

__all__ = ["GitHubActionsConfig", "GitHubActionsProvider"]
