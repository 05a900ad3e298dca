"""Pydantic models for GitHub Actions API responses."""

from collections.abc import Sequence

from pydantic import BaseModel

from ci_gate_action.models.run import WorkflowRun


class WorkflowRunsResponse(BaseModel):
    """Response from list workflow runs API."""

    workflow_runs: Sequence[WorkflowRun]
