# SPDX-License-Identifier: MIT
"""Configure context for mnm.

The Configure class checks the environment before a build starts:
that the toolchain can run, and where the host runtime (Node.js) keeps
the headers and libraries a native module compiles and links against.
Problems found here are fatal and reported before any compilation.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from mnm.configure.platform import get_platform
from mnm.core.errors import ConfigureError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mnm.toolchains.base import BaseToolchain, RuntimeLayout

logger = logging.getLogger(__name__)

RUNTIME_HOME_VAR = "NODE_HOME"


def trim_quotes(value: str) -> str:
    """Strip one leading and one trailing double quote.

    Windows users often set ``NODE_HOME="C:\\Program Files\\nodejs"``
    with the quotes included.
    """
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


class Configure:
    """Context for the configure phase.

    Example:
        config = Configure()
        toolchain = find_toolchain(config.platform)
        config.check_toolchain(toolchain)
        layout = config.find_runtime(toolchain)

    Attributes:
        platform: The detected platform.
        environ: Environment variables consulted during configuration.
    """

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Create a configure context.

        Args:
            environ: Environment to read (default: ``os.environ``).
        """
        self.platform = get_platform()
        self.environ = os.environ if environ is None else environ

    def find_program(self, name: str) -> Path | None:
        """Find a program on PATH.

        Args:
            name: Program name (e.g., 'g++').

        Returns:
            Path to the program, or None if not found.
        """
        path = shutil.which(name, path=self.environ.get("PATH"))
        if path is None:
            logger.debug("Program %s not found", name)
            return None
        logger.debug("Found %s at %s", name, path)
        return Path(path)

    def check_toolchain(self, toolchain: BaseToolchain) -> None:
        """Verify the environment can run the toolchain.

        Raises:
            ConfigureError: If it cannot.
        """
        toolchain.check_environment(self.environ)

    def find_runtime_home(self, toolchain: BaseToolchain) -> Path:
        """Locate the runtime installation.

        ``NODE_HOME`` wins when set. Otherwise, on POSIX, the prefix two
        levels above the ``node`` executable on PATH is used.

        Raises:
            ConfigureError: If no home is known or it does not exist.
        """
        home = self.environ.get(RUNTIME_HOME_VAR)
        if home:
            home = trim_quotes(home)
        elif toolchain.platform.is_posix:
            node = self.find_program("node")
            if node is not None:
                home = str(node.resolve().parent.parent)

        if not home:
            raise ConfigureError(f"You must specify {RUNTIME_HOME_VAR}.")

        path = Path(home).resolve()
        if not path.exists():
            raise ConfigureError(
                f'Node path "{path}" not found, try setting {RUNTIME_HOME_VAR}'
            )
        logger.info("Using runtime at %s", path)
        return path

    def find_runtime(self, toolchain: BaseToolchain) -> RuntimeLayout:
        """Locate the runtime and lay out its include and library dirs."""
        return toolchain.runtime_layout(self.find_runtime_home(toolchain))
