"""Tests for gate orchestrator."""

import asyncio
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from ci_gate_action.classifier import (
    RunClassifier,
    RunConclusionError,
    RunInProgressError,
    RunNotFoundError,
)
from ci_gate_action.models.result import CheckResult
from ci_gate_action.models.target import RepositoryTarget
from ci_gate_action.orchestrator import GateOrchestrator
from ci_gate_action.providers.base import ProviderError
from ci_gate_action.testing.factories import RepositoryTargetFactory

TARGET_A = RepositoryTarget(owner="a", repo="x", workflow="ci.yml")
TARGET_B = RepositoryTarget(owner="b", repo="y", workflow="ci.yml")


def success(target: RepositoryTarget) -> CheckResult:
    """Create a success result for a target."""
    return CheckResult(target=target, status="success", message="ok", run_id=1)


@pytest.fixture
def classifier_mock() -> Mock:
    """Create mock classifier."""
    classifier = Mock(spec=RunClassifier)
    classifier.classify = AsyncMock()
    return classifier


@pytest.fixture
def orchestrator(classifier_mock: Mock) -> GateOrchestrator:
    """Create orchestrator with mock classifier."""
    return GateOrchestrator(classifier=classifier_mock)


async def test_classifies_each_target_once(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """Invokes the classifier exactly once per target."""
    targets = RepositoryTargetFactory.batch(5)
    classifier_mock.classify.side_effect = lambda target, ref, mode: success(target)

    verdict = await orchestrator.check_all(targets, "refs/heads/main", "latest")

    assert verdict.succeeded
    assert [result.target for result in verdict.results] == targets
    assert classifier_mock.classify.call_count == 5
    for target in targets:
        classifier_mock.classify.assert_any_call(target, "refs/heads/main", "latest")


async def test_passes_mode_to_classifier(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """Forwards the check mode to every classification."""
    classifier_mock.classify.side_effect = lambda target, ref, mode: success(target)

    await orchestrator.check_all([TARGET_A], "main", "latest-successful")

    classifier_mock.classify.assert_called_once_with(
        TARGET_A, "main", "latest-successful"
    )


async def test_all_succeeded(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """Both targets succeeding produces a successful verdict."""
    classifier_mock.classify.side_effect = [success(TARGET_A), success(TARGET_B)]

    verdict = await orchestrator.check_all([TARGET_A, TARGET_B], "refs/heads/main")

    assert verdict.succeeded
    assert verdict.failures == []


async def test_one_failure_is_reported(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """A single failing target yields exactly one failure reason."""
    classifier_mock.classify.side_effect = [
        success(TARGET_A),
        RunConclusionError(
            "Latest run (ID: 2) in b/y failed with conclusion: failure."
        ),
    ]

    verdict = await orchestrator.check_all([TARGET_A, TARGET_B], "refs/heads/main")

    assert not verdict.succeeded
    assert len(verdict.failures) == 1
    assert verdict.failures[0].target == TARGET_B
    assert "b/y" in verdict.failures[0].message
    assert "a/x" not in verdict.message


async def test_collects_every_failure(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """Failures of every kind are recorded, one per failing target."""
    targets = RepositoryTargetFactory.batch(4)
    classifier_mock.classify.side_effect = [
        RunNotFoundError("not found"),
        RunInProgressError("in progress"),
        success(targets[2]),
        RunConclusionError("failed"),
    ]

    verdict = await orchestrator.check_all(targets, "main")

    assert len(verdict.results) == 4
    assert [result.message for result in verdict.failures] == [
        "not found",
        "in progress",
        "failed",
    ]
    assert [result.target for result in verdict.failures] == [
        targets[0],
        targets[1],
        targets[3],
    ]


@pytest.mark.parametrize(
    "error",
    [
        ProviderError("Failed to list workflow runs: 500 Internal Server Error"),
        aiohttp.ClientConnectionError("Connection refused"),
        RuntimeError("unexpected"),
    ],
)
async def test_converts_transport_errors(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
    error: Exception,
) -> None:
    """Errors raised by the API client become failures for their target."""
    classifier_mock.classify.side_effect = [error, success(TARGET_B)]

    verdict = await orchestrator.check_all([TARGET_A, TARGET_B], "main")

    assert len(verdict.failures) == 1
    failure = verdict.failures[0]
    assert failure.target == TARGET_A
    assert failure.status == "failure"
    assert failure.message == (
        f"Failed to check workflow 'ci.yml' in repository 'a/x': {error}"
    )


async def test_does_not_short_circuit(
    orchestrator: GateOrchestrator,
    classifier_mock: Mock,
) -> None:
    """Runs checks concurrently and waits for all of them."""
    started: list[str] = []
    release = asyncio.Event()

    async def classify(
        target: RepositoryTarget, ref: str, mode: str
    ) -> CheckResult:
        started.append(target.slug)
        if target == TARGET_A:
            raise RunNotFoundError("fails early")
        await release.wait()
        return success(target)

    classifier_mock.classify.side_effect = classify

    async def release_when_all_started() -> None:
        while len(started) < 2:
            await asyncio.sleep(0)
        release.set()

    verdict, _ = await asyncio.gather(
        orchestrator.check_all([TARGET_A, TARGET_B], "main"),
        release_when_all_started(),
    )

    assert started == ["a/x", "b/y"]
    assert [result.status for result in verdict.results] == ["failure", "success"]

