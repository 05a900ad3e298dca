"""GitHub Actions provider implementation."""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from urllib.parse import quote

import aiohttp

from ci_gate_action.models.run import WorkflowConclusion, WorkflowRun
from ci_gate_action.providers.base import ProviderError, RunsProvider
from ci_gate_action.providers.github_actions.config import GitHubActionsConfig
from ci_gate_action.providers.github_actions.models import WorkflowRunsResponse

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class GitHubActionsProvider(RunsProvider):
    """GitHub Actions runs provider."""

    config: GitHubActionsConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GitHubActionsConfig
    ) -> AsyncGenerator["GitHubActionsProvider", None]:
        """Create provider with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

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

        GitHub accepts conclusions in the ``status`` query parameter, so the
        conclusion filter is applied server-side.
        """
        url = (
            f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/actions/workflows/{quote(workflow_id, safe='')}/runs"
        )
        params = {"branch": branch, "per_page": str(per_page)}
        if conclusion is not None:
            params["status"] = conclusion

        log.debug("Listing workflow runs: url=%s, params=%s", url, params)

        async with self.session.get(url, params=params) as response:
            if response.status != 200:
                text = await response.text()
                raise ProviderError(
                    f"Failed to list workflow runs: {response.status} {text}"
                )
            data = await response.json()

        return WorkflowRunsResponse.model_validate(data).workflow_runs
