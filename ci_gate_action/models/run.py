"""Pydantic models for workflow runs returned by the provider."""

from datetime import datetime
from typing import Literal, TypeAlias

from pydantic import BaseModel

WorkflowStatus: TypeAlias = Literal[
    "queued",
    "in_progress",
    "completed",
    "waiting",
    "requested",
    "pending",
    "action_required",
]

WorkflowConclusion: TypeAlias = Literal[
    "success",
    "failure",
    "cancelled",
    "timed_out",
    "action_required",
    "neutral",
    "skipped",
    "stale",
]


class WorkflowRun(BaseModel):
    """A single execution of a workflow."""

    id: int
    status: WorkflowStatus
    conclusion: WorkflowConclusion | None = None
    html_url: str
    updated_at: datetime
