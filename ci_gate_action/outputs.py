"""Outputs and failure reporting for the GitHub Actions runner."""

import logging
import os
import sys

log = logging.getLogger(__name__)


def set_output(name: str, value: str) -> None:
    """Set a step output by appending to the ``GITHUB_OUTPUT`` file.

    Outside of a runner the output is only logged.
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        log.info("GITHUB_OUTPUT not set, output %s=%s", name, value)
        return

    with open(output_path, "a", encoding="utf-8") as output_file:
        output_file.write(f"{name}={value}\n")


def escape_data(message: str) -> str:
    """Escape a message for use in a workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Report the step as failed with an error annotation."""
    log.error("%s", message)
    print(f"::error::{escape_data(message)}", file=sys.stdout, flush=True)
