"""Gate orchestrator for checking all repository targets concurrently."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ci_gate_action.classifier import CheckFailedError, RunClassifier
from ci_gate_action.config import CheckMode
from ci_gate_action.models.result import CheckResult, Verdict
from ci_gate_action.models.target import RepositoryTarget

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class GateOrchestrator:
    """Runs the classifier for every target and aggregates the results."""

    classifier: RunClassifier

    async def check_all(
        self,
        targets: Sequence[RepositoryTarget],
        ref: str,
        mode: CheckMode = "latest",
    ) -> Verdict:
        """Check all targets concurrently and return the verdict.

        Every check runs to completion; a failing target never cancels the
        others.

        Args:
            targets: Repositories and workflows to check
            ref: Branch reference shared by all targets
            mode: Which run to consider for each target

        Returns:
            Verdict with exactly one result per target, in input order

        """
        log.info("Checking %d target(s) on %s...", len(targets), ref)
        results = await asyncio.gather(
            *(self.classifier.classify(target, ref, mode) for target in targets),
            return_exceptions=True,
        )
        log.info("Checks completed")

        return Verdict(results=self._process_results(targets, results))

    def _process_results(
        self,
        targets: Sequence[RepositoryTarget],
        results: Sequence[CheckResult | BaseException],
    ) -> Sequence[CheckResult]:
        """Pair results with their targets, turning exceptions into failures."""
        final_results: list[CheckResult] = []

        for target, result in zip(targets, results, strict=True):
            if isinstance(result, CheckResult):
                final_results.append(result)
                continue

            if isinstance(result, CheckFailedError):
                log.error("Check failed for %s: %s", target.slug, result)
                message = str(result)
            elif isinstance(result, Exception):
                log.error(
                    "Check errored for %s: %s", target.slug, result, exc_info=result
                )
                message = (
                    f"Failed to check workflow '{target.workflow}' "
                    f"in repository '{target.slug}': {result}"
                )
            else:
                raise result

            final_results.append(
                CheckResult(target=target, status="failure", message=message)
            )

        return final_results
