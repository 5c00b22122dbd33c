"""Writes GitHub Actions workflow commands: step outputs, annotations and failure status.

See https://docs.github.com/en/actions/reference/workflow-commands-for-github-actions
"""

import sys
import uuid
from pathlib import Path
from typing import TextIO

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str, stream: TextIO | None = None) -> None:
    """Print a workflow command (e.g. `::warning::message`) for the runner to pick up."""
    stream = stream or sys.stdout
    stream.write(f"::{command}::{escape_data(message)}\n")
    stream.flush()


def debug(message: str, stream: TextIO | None = None) -> None:
    """Emit a debug message, only shown when step debug logging is enabled."""
    issue_command("debug", message, stream)


def warning(message: str, stream: TextIO | None = None) -> None:
    """Emit a warning annotation."""
    issue_command("warning", message, stream)


def error(message: str, stream: TextIO | None = None) -> None:
    """Emit an error annotation."""
    issue_command("error", message, stream)


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Mark the step as failed with a reason.

    The caller is responsible for exiting with a non-zero status.
    """
    logger.error("Marking step as failed", reason=message)
    error(message, stream)


def format_output(name: str, value: str) -> str:
    """Format a single step output in the syntax expected by the GITHUB_OUTPUT file."""
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    # Multi-line values need a delimiter that cannot appear in the value
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    while delimiter in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if not value.endswith("\n"):
        value += "\n"
    return f"{name}<<{delimiter}\n{value}{delimiter}\n"


def set_outputs(outputs: dict[str, str], output_path: Path | None) -> None:
    """Publish step outputs.

    When the runner does not provide a GITHUB_OUTPUT file (e.g. a local run),
    the outputs are only logged.
    """
    if output_path is None:
        logger.warning("GITHUB_OUTPUT is not set, outputs will only be logged", outputs=outputs)
        return
    with open(output_path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(format_output(name, value))
    logger.info("Published step outputs", output_names=list(outputs), output_path=str(output_path))
