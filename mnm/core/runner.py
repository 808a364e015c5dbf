# SPDX-License-Identifier: MIT
"""Running external compiler and linker processes."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Exit code reported when the tool could not be started at all.
LAUNCH_FAILED = 127


class CommandRunner(Protocol):
    """Callable that runs a tool and returns its exit code."""

    def __call__(self, cmd: str, args: Sequence[str]) -> int: ...


def run_command(cmd: str, args: Sequence[str]) -> int:
    """Run a tool, streaming its output straight to our stdout/stderr.

    The child inherits the parent's standard streams, so its output
    appears live and unmodified. This blocks until the child exits.

    Args:
        cmd: The executable to run.
        args: Arguments to pass to it.

    Returns:
        The child's exit code, or LAUNCH_FAILED if it could not be started.
    """
    try:
        result = subprocess.run([cmd, *args])
        return result.returncode
    except OSError as e:
        logger.error("Failed to run %s: %s", cmd, e)
        return LAUNCH_FAILED
