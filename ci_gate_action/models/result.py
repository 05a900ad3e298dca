"""Models for gate check results."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from ci_gate_action.models.target import RepositoryTarget

FAILURE_SEPARATOR = "\n---\n"


@dataclass(frozen=True, kw_only=True)
class CheckResult:
    """Outcome of checking a single repository target.

    Failures carry the reason in ``message``; the run diagnostics are only
    known when a run was found.
    """

    target: RepositoryTarget
    status: Literal["success", "failure"]
    message: str
    run_id: int | None = None
    run_url: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class Verdict:
    """Aggregate pass/fail result over every checked target."""

    results: Sequence[CheckResult]

    @property
    def failures(self) -> Sequence[CheckResult]:
        """Results that did not succeed, in input order."""
        return [result for result in self.results if result.status != "success"]

    @property
    def succeeded(self) -> bool:
        """Whether every target succeeded."""
        return not self.failures

    @property
    def message(self) -> str:
        """Success summary or the combined failure report."""
        if self.succeeded:
            return (
                f"All {len(self.results)} required CI pipelines "
                "concluded successfully."
            )
        reasons = FAILURE_SEPARATOR.join(result.message for result in self.failures)
        return f"ONE OR MORE REQUIRED CI PIPELINES FAILED:\n{reasons}"
