# SPDX-License-Identifier: MIT
"""The Builder: configure, compile and link one native module.

A project's build script creates a Builder, registers sources and any
extra flags, then hands control to :meth:`Builder.run`::

    from mnm import Builder

    builder = Builder()
    builder.append_source_dir("src")
    builder.append_include_dir("deps/include")
    raise SystemExit(builder.run())

``run`` reads the action (``build``, ``compile``, ``link``) and options
from the command line. The three actions are also available directly as
:meth:`Builder.build`, :meth:`Builder.compile` and :meth:`Builder.link`.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from mnm.configure.config import Configure
from mnm.core.build_context import BuildContext
from mnm.core.compile import compile_sources
from mnm.core.errors import BuildError
from mnm.core.flags import COMPILE_FLAGS, LINK_FLAGS
from mnm.core.link import link_objects
from mnm.core.runner import run_command
from mnm.toolchains import find_toolchain

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from mnm.core.runner import CommandRunner
    from mnm.toolchains.base import BaseToolchain, RuntimeLayout

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".cpp", ".c", ".cxx")


class BuildPhase(Enum):
    """Where a Builder is in its compile/link sequence."""

    IDLE = "idle"
    COMPILING = "compiling"
    LINKING = "linking"
    DONE = "done"
    FAILED = "failed"


def _as_list(value: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]) -> list:
    if isinstance(value, (str, os.PathLike)):
        return [value]
    return list(value)


class Builder:
    """Builds a native module from a set of C/C++ sources.

    Configuration happens in the constructor: the toolchain profile is
    chosen for the host, its environment is checked, and the runtime's
    headers and libraries are located. Any problem raises
    ConfigureError before a single file is compiled.

    Attributes:
        context: The build state passed to the compile and link stages.
        phase: Current BuildPhase.
        verbose: Log full command lines (applied by ``run``).
    """

    def __init__(
        self,
        target: str = "native_bindings",
        *,
        project_dir: Path | str | None = None,
        build_dir: Path | str | None = None,
        toolchain: BaseToolchain | None = None,
        runtime: RuntimeLayout | None = None,
        environ: Mapping[str, str] | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        """Create and configure a builder.

        Args:
            target: Module name; the output is ``<target>.node``.
            project_dir: Project root (default: current directory).
            build_dir: Build directory (default: ``<project_dir>/build``).
                Objects and the module go to its ``Release`` subdirectory.
            toolchain: Toolchain profile (default: chosen for the host).
            runtime: Runtime layout (default: located via NODE_HOME).
            environ: Environment to configure from (default: os.environ).
            runner: Runs the compiler and linker processes.

        Raises:
            ConfigureError: If the toolchain or runtime is unusable.
        """
        config = Configure(environ=environ)
        toolchain = toolchain or find_toolchain(config.platform)
        config.check_toolchain(toolchain)
        if runtime is None:
            runtime = config.find_runtime(toolchain)

        project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
        self.build_dir = Path(os.path.abspath(build_dir or project_dir / "build"))
        self.context = BuildContext(
            toolchain=toolchain,
            project_dir=project_dir,
            output_dir=self.build_dir / "Release",
            target=target,
            runtime=runtime,
            runner=runner,
        )
        self.phase = BuildPhase.IDLE
        self.verbose = False

        self.append_unique(COMPILE_FLAGS, toolchain.default_compile_flags())
        self.append_unique(LINK_FLAGS, toolchain.default_link_flags())
        self.append_linker_library(toolchain.default_libraries())

    # =========================================================================
    # Settings
    # =========================================================================

    @property
    def toolchain(self) -> BaseToolchain:
        return self.context.toolchain

    @property
    def target(self) -> str:
        return self.context.target

    @target.setter
    def target(self, value: str) -> None:
        self.context.target = value

    @property
    def show_warnings(self) -> bool:
        return self.context.show_warnings

    @show_warnings.setter
    def show_warnings(self, value: bool) -> None:
        self.context.show_warnings = value

    @property
    def cxx(self) -> str:
        return self.context.cxx

    @cxx.setter
    def cxx(self, value: str) -> None:
        self.context.cxx = value

    @property
    def linker(self) -> str:
        return self.context.linker

    @linker.setter
    def linker(self, value: str) -> None:
        self.context.linker = value

    @property
    def project_dir(self) -> Path:
        return self.context.project_dir

    @property
    def output_dir(self) -> Path:
        return self.context.output_dir

    @property
    def target_path(self) -> Path:
        return self.context.target_path

    @property
    def sources(self) -> list[Path]:
        return self.context.sources

    @property
    def object_files(self) -> list[Path]:
        return self.context.object_files

    # =========================================================================
    # Flags and sources
    # =========================================================================

    def get_flags(self, group: str) -> list[str]:
        """Return the flags in a group, creating it if needed."""
        return self.context.flags.get(group)

    def append_unique(self, group: str, flags: str | Iterable[str]) -> None:
        """Append flags to a group, skipping any already present."""
        self.context.flags.append(group, flags)

    def append_include_dir(self, directory: Path | str | Iterable[Path | str]) -> None:
        for d in _as_list(directory):
            self.append_unique(COMPILE_FLAGS, self.toolchain.include_flag(d))

    def append_linker_library(self, lib: str | Iterable[str]) -> None:
        for name in _as_list(lib):
            self.append_unique(LINK_FLAGS, self.toolchain.library_flag(name))

    def append_linker_search_dir(
        self, directory: Path | str | Iterable[Path | str]
    ) -> None:
        for d in _as_list(directory):
            self.append_unique(LINK_FLAGS, self.toolchain.library_dir_flag(d))

    def append_source(self, source: Path | str | Iterable[Path | str]) -> None:
        """Register one or more source files.

        Relative paths are taken from the project directory.
        """
        for s in _as_list(source):
            self.context.sources.append(Path(s))

    def append_source_dir(self, directory: Path | str | Iterable[Path | str]) -> None:
        """Register every C/C++ source directly inside a directory.

        Files ending in .cpp, .c or .cxx are added in name order.
        Subdirectories are not searched.
        """
        for d in _as_list(directory):
            d = Path(d)
            entries = sorted((self.project_dir / d).iterdir())
            for entry in entries:
                if entry.is_file() and entry.suffix in SOURCE_SUFFIXES:
                    self.append_source(d / entry.name)

    # =========================================================================
    # Actions
    # =========================================================================

    def compile(self) -> None:
        """Compile all sources.

        Raises:
            BuildError: If there is nothing to compile or a file failed.
        """
        self.context.start_run(len(self.context.sources))
        self._compile()
        self.phase = BuildPhase.DONE

    def link(self) -> None:
        """Link the objects from a previous compile.

        When nothing was compiled in this process, the objects expected
        from the registered sources are linked.

        Raises:
            LinkError: If the linker failed.
        """
        self.context.start_run(1)
        if not self.context.object_files:
            self.context.object_files.extend(
                self.context.object_path(s) for s in self.context.sources
            )
        self._link()
        self.phase = BuildPhase.DONE

    def build(self) -> None:
        """Compile, then link if every file compiled.

        Progress is numbered across both stages: N sources plus one link.

        Raises:
            BuildError: From whichever stage failed; a failed compile
                is never followed by a link.
        """
        self.context.start_run(len(self.context.sources) + 1)
        self._compile()
        self._link()
        self.phase = BuildPhase.DONE
        logger.info("Done.")

    def _compile(self) -> None:
        self.phase = BuildPhase.COMPILING
        try:
            compile_sources(self.context)
        except BuildError:
            self.phase = BuildPhase.FAILED
            raise

    def _link(self) -> None:
        self.phase = BuildPhase.LINKING
        try:
            link_objects(self.context)
        except BuildError:
            self.phase = BuildPhase.FAILED
            raise

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the action named on the command line.

        Args:
            argv: Arguments (default: ``sys.argv[1:]``).

        Returns:
            Process exit code: 0 on success, 1 on failure.
        """
        from mnm.cli import run_builder

        return run_builder(self, argv)

    def __repr__(self) -> str:
        return (
            f"Builder({self.target!r}, toolchain={self.toolchain.name!r}, "
            f"sources={len(self.sources)}, phase={self.phase.value!r})"
        )
