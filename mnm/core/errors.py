# SPDX-License-Identifier: MIT
"""Custom exceptions for mnm.

All mnm exceptions inherit from MnmError. Configuration problems are
reported before any compilation starts; build problems are raised by
the compile and link stages once they have finished their work.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class MnmError(Exception):
    """Base class for all mnm exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigureError(MnmError):
    """Error during configuration.

    Raised when the toolchain environment is unusable or the host
    runtime's headers and libraries cannot be located.
    """


class ToolNotFoundError(ConfigureError):
    """Required tool was not found.

    Attributes:
        tool: The name of the tool that was not found.
    """

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"tool not found: {tool}")


class BuildError(MnmError):
    """Error while compiling or linking."""


class NothingToCompileError(BuildError):
    """No source files were registered."""

    def __init__(self) -> None:
        super().__init__("Nothing to compile!")


class CompileError(BuildError):
    """At least one source file failed to compile.

    Attributes:
        failed: Sources whose compiler invocation exited non-zero,
            in registration order.
    """

    def __init__(self, failed: list[Path]) -> None:
        self.failed = failed
        super().__init__("At least one file failed to compile.")


class LinkError(BuildError):
    """The linker exited non-zero.

    Attributes:
        returncode: The linker's exit code.
    """

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__("Failed to link.")
