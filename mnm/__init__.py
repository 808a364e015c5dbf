# SPDX-License-Identifier: MIT
"""
mnm: an incremental build driver for native Node.js modules.

mnm compiles a set of C/C++ sources with the host toolchain (g++ on
POSIX, cl.exe on Windows) and links them into ``<target>.node``.
Sources whose dependency files show nothing changed are not recompiled,
and the link is skipped when the module is newer than every object.
"""

from __future__ import annotations

__version__ = "0.2.0"

from mnm.cli import run  # noqa: E402
from mnm.core.builder import Builder, BuildPhase  # noqa: E402
from mnm.core.errors import (  # noqa: E402
    BuildError,
    CompileError,
    ConfigureError,
    LinkError,
    MnmError,
)
from mnm.toolchains import find_toolchain  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Core classes
    "Builder",
    "BuildPhase",
    "run",
    # Errors
    "MnmError",
    "ConfigureError",
    "BuildError",
    "CompileError",
    "LinkError",
    # Toolchain discovery
    "find_toolchain",
]
