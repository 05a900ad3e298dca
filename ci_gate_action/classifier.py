"""Classification of the most relevant workflow run of a repository."""

import logging
from dataclasses import dataclass

from ci_gate_action.config import CheckMode, strip_branch_prefix
from ci_gate_action.models.result import CheckResult
from ci_gate_action.models.target import RepositoryTarget
from ci_gate_action.providers.base import RunsProvider

log = logging.getLogger(__name__)


class CheckFailedError(Exception):
    """Raised when a target does not pass the gate.

    The exception message is the human-readable failure reason.
    """


class RunNotFoundError(CheckFailedError):
    """Raised when no matching run exists."""


class RunInProgressError(CheckFailedError):
    """Raised when the latest run has not completed yet."""


class RunConclusionError(CheckFailedError):
    """Raised when the latest run completed without success."""


@dataclass(frozen=True, kw_only=True)
class RunClassifier:
    """Decides whether a repository's workflow passes the gate."""

    provider: RunsProvider

    async def classify(
        self, target: RepositoryTarget, ref: str, mode: CheckMode = "latest"
    ) -> CheckResult:
        """Fetch the most relevant run for a target and classify it.

        In ``latest`` mode the newest run must itself be a completed success:
        a newer run that is still in progress or failed blocks the gate even
        when an older run succeeded. In ``latest-successful`` mode the query
        is filtered to successful runs and whatever comes back passes.

        Args:
            target: Repository and workflow to check
            ref: Branch reference, with or without the ``refs/heads/`` prefix
            mode: Which run to consider

        Returns:
            A success result describing the run

        Raises:
            CheckFailedError: If the target does not pass the gate
            ProviderError: If the provider request fails

        """
        branch = strip_branch_prefix(ref)
        successful_only = mode == "latest-successful"

        log.info(
            "Checking %s run for: %s, Workflow: %s, Branch: %s",
            "LATEST SUCCESSFUL" if successful_only else "LATEST",
            target.slug,
            target.workflow,
            branch,
        )

        runs = await self.provider.list_workflow_runs(
            target.owner,
            target.repo,
            target.workflow,
            branch,
            conclusion="success" if successful_only else None,
            per_page=1,
        )

        if not runs:
            ref_note = f" (ref '{ref}')" if ref != branch else ""
            raise RunNotFoundError(
                f"No {'successful ' if successful_only else ''}run found for "
                f"workflow '{target.workflow}' on branch '{branch}'{ref_note} "
                f"in repository '{target.slug}'."
            )

        run = runs[0]

        if successful_only:
            message = (
                f"Latest successful run (ID: {run.id}) in {target.slug} "
                f"completed at {run.updated_at.isoformat()}."
            )
        elif run.status != "completed":
            raise RunInProgressError(
                f"Latest run (ID: {run.id}) in {target.slug} is still in "
                f"progress (status: {run.status}); cannot proceed."
            )
        elif run.conclusion != "success":
            raise RunConclusionError(
                f"Latest run (ID: {run.id}) in {target.slug} failed "
                f"with conclusion: {run.conclusion}."
            )
        else:
            message = (
                f"Latest run (ID: {run.id}) in {target.slug} "
                "concluded successfully."
            )

        log.info("SUCCESS: %s", message)
        return CheckResult(
            target=target,
            status="success",
            message=message,
            run_id=run.id,
            run_url=run.html_url,
            updated_at=run.updated_at,
        )
