"""Abstract base class for CI providers queried by the gate."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ci_gate_action.models.run import WorkflowConclusion, WorkflowRun


class ProviderError(RuntimeError):
    """Raised when the provider API returns an unexpected response."""


class RunsProvider(ABC):
    """Read-only access to the workflow runs of a CI provider."""

    @abstractmethod
    async def list_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: str,
        branch: str,
        *,
        conclusion: WorkflowConclusion | None = None,
        per_page: int = 1,
    ) -> Sequence[WorkflowRun]:
        """List the most recent runs of a workflow on a branch.

        Args:
            owner: Repository owner
            repo: Repository name
            workflow_id: Workflow ID or workflow file name
            branch: Plain branch name (without ``refs/heads/``)
            conclusion: Only return runs that finished with this conclusion
            per_page: Maximum number of runs to return

        Returns:
            Matching runs, most recent first

        Raises:
            ProviderError: If the provider rejects the request

        """
