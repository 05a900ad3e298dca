"""Models for the repositories a gate checks."""

from pydantic import Field

from ci_gate_action.models.base import Model


class RepositoryTarget(Model):
    """One entry of the repositories-to-check input."""

    owner: str = Field(..., min_length=1, description="Repository owner")
    repo: str = Field(..., min_length=1, description="Repository name")
    workflow: str = Field(
        ...,
        min_length=1,
        description="Workflow ID or workflow file name (e.g., 'ci.yml')",
    )

    @property
    def slug(self) -> str:
        """Repository identifier in owner/repo format."""
        return f"{self.owner}/{self.repo}"
