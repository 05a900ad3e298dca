"""CLI entry point for the CI gate action."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import SecretStr

from ci_gate_action.classifier import RunClassifier
from ci_gate_action.config import (
    CHECK_MODES,
    CheckMode,
    ConfigError,
    parse_targets,
    validate_ref,
)
from ci_gate_action.models.result import CheckResult, Verdict
from ci_gate_action.orchestrator import GateOrchestrator
from ci_gate_action.outputs import set_failed, set_output
from ci_gate_action.providers.github_actions import (
    GitHubActionsConfig,
    GitHubActionsProvider,
)

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
}


def log_results_summary(log: logging.Logger, results: Sequence[CheckResult]) -> None:
    """Log a formatted summary of check results with run URLs."""
    log.info("=" * 80)
    log.info("Gate Results Summary:")
    log.info("=" * 80)

    for result in results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s (%s): %s",
            symbol,
            result.target.slug,
            result.target.workflow,
            result.status,
        )
        if result.run_url:
            log.info("  Run URL: %s", result.run_url)
        log.info("  Message: %s", result.message)


def format_output(verdict: Verdict) -> dict[str, Any]:
    """Format the verdict for JSON output."""
    results = [
        {
            "owner": result.target.owner,
            "repo": result.target.repo,
            "workflow": result.target.workflow,
            "status": result.status,
            "message": result.message,
            "run_id": result.run_id,
            "run_url": result.run_url,
        }
        for result in verdict.results
    ]

    return {
        "total": len(results),
        "passed": sum(1 for r in results if r["status"] == "success"),
        "failed": sum(1 for r in results if r["status"] == "failure"),
        "success": verdict.succeeded,
        "results": results,
    }


async def run(
    repositories_json: str,
    ref: str,
    token: str,
    mode: CheckMode = "latest",
    api_base_url: str = "https://api.github.com",
) -> int:
    """Check all configured repositories and return exit code."""
    log = logging.getLogger("ci_gate_action")

    try:
        targets = parse_targets(repositories_json)
    except ConfigError as e:
        set_failed(f"Invalid JSON format for 'repositories-to-check': {e}")
        return 1

    try:
        validate_ref(ref)
    except ConfigError as e:
        set_failed(str(e))
        return 1

    log.info("Loaded %d target(s) (mode=%s)", len(targets), mode)

    config = GitHubActionsConfig(token=SecretStr(token), api_base_url=api_base_url)
    async with GitHubActionsProvider.from_config(config) as provider:
        orchestrator = GateOrchestrator(classifier=RunClassifier(provider=provider))
        verdict = await orchestrator.check_all(targets, ref, mode)

    log_results_summary(log, verdict.results)
    print(json.dumps(format_output(verdict), indent=2))

    if not verdict.succeeded:
        set_failed(verdict.message)
        return 1

    log.info("SUCCESS! %s", verdict.message)
    set_output("is-success", "true")
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gate on the latest GitHub Actions runs of several repositories"
    )
    parser.add_argument(
        "--repositories-to-check",
        required=True,
        help='JSON array of {"owner", "repo", "workflow"} objects',
    )
    parser.add_argument(
        "--ref",
        required=True,
        help="Branch to check (e.g., 'main' or 'refs/heads/main')",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("GITHUB_TOKEN"),
        help="GitHub token with actions:read access (default: $GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--mode",
        choices=CHECK_MODES,
        default="latest",
        help="'latest' requires the newest run to have succeeded, "
        "'latest-successful' only requires a successful run to exist",
    )
    parser.add_argument(
        "--api-base-url",
        default="https://api.github.com",
        help="GitHub API base URL",
    )

    args = parser.parse_args()
    if not args.token:
        parser.error("--token is required when GITHUB_TOKEN is not set")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            repositories_json=args.repositories_to_check,
            ref=args.ref,
            token=args.token,
            mode=args.mode,
            api_base_url=args.api_base_url,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
