"""Parsing and validation of the gate inputs."""

from collections.abc import Sequence
from typing import Literal, TypeAlias

from pydantic import TypeAdapter, ValidationError

from ci_gate_action.models.target import RepositoryTarget

BRANCH_PREFIX = "refs/heads/"

# "latest" requires the newest run itself to be a completed success,
# "latest-successful" only looks at the newest run that succeeded.
CheckMode: TypeAlias = Literal["latest", "latest-successful"]

CHECK_MODES: Sequence[CheckMode] = ("latest", "latest-successful")

_targets_adapter = TypeAdapter(list[RepositoryTarget])


class ConfigError(Exception):
    """Raised when the gate inputs are invalid."""


def parse_targets(repositories_json: str) -> Sequence[RepositoryTarget]:
    """Parse the repositories-to-check input.

    Args:
        repositories_json: JSON array of ``{owner, repo, workflow}`` objects

    Returns:
        The repository targets, in input order

    Raises:
        ConfigError: If the input is not a valid, non-empty JSON array of
            repository targets

    """
    try:
        targets = _targets_adapter.validate_json(repositories_json)
    except ValidationError as e:
        raise ConfigError(str(e)) from e

    if not targets:
        raise ConfigError(
            "Input 'repositories-to-check' must be a non-empty JSON array."
        )
    return targets


def strip_branch_prefix(ref: str) -> str:
    """Return the plain branch name for a ref such as ``refs/heads/main``."""
    return ref.removeprefix(BRANCH_PREFIX)


def validate_ref(ref: str) -> str:
    """Check that a ref names a branch and return the ref unchanged.

    Raises:
        ConfigError: If no branch name is left once the prefix is removed

    """
    if not strip_branch_prefix(ref).strip():
        raise ConfigError(f"Input 'ref' must name a branch, got '{ref}'.")
    return ref
