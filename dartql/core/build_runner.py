"""Runs Flutter's build_runner over the generated documents."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127

BUILD_RUNNER_COMMANDS = (
    ["flutter", "pub", "run", "build_runner", "clean"],
    ["flutter", "pub", "run", "build_runner", "build", "--delete-conflicting-outputs"],
)


def run_build_runner(cwd: str | Path | None = None) -> int:
    """Clean and rebuild generated Dart code.

    Returns the exit status of the first failing step, or 0.
    """
    for command in BUILD_RUNNER_COMMANDS:
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except FileNotFoundError:
            logger.error("'%s' not found on PATH", command[0])
            return COMMAND_NOT_FOUND
        if completed.returncode != 0:
            logger.error("'%s' exited with status %d", " ".join(command), completed.returncode)
            return completed.returncode
    return 0
