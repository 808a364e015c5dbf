# SPDX-License-Identifier: MIT
"""Build state shared by the compile and link stages.

A BuildContext holds everything one build run needs: the toolchain
profile, the flag groups, the source work list, the objects accumulated
so far, and the progress counters. The stages receive it explicitly;
there is no global builder state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from mnm.core.flags import FlagRegistry
from mnm.core.runner import run_command

if TYPE_CHECKING:
    from mnm.core.runner import CommandRunner
    from mnm.toolchains.base import BaseToolchain, RuntimeLayout

DEPFILE_SUFFIX = ".d"


@dataclass
class BuildContext:
    """State for one native-module build.

    Attributes:
        toolchain: The toolchain profile in use.
        project_dir: Root that source paths are made relative to.
        output_dir: Directory receiving objects and the linked module.
        target: Name of the linked module, without suffix.
        flags: Compile and link flag groups.
        sources: Sources to compile, in registration order.
        object_files: Objects accumulated by the compile stage.
        runtime: Runtime headers and libraries, if configured.
        cxx: Compiler command (default: the toolchain's).
        linker: Linker command (default: the toolchain's).
        show_warnings: Append the toolchain's warning flags at compile time.
        current_task: Number of tasks finished in this run.
        total_tasks: Number of tasks planned for this run.
        runner: Runs the compiler and linker.
    """

    toolchain: BaseToolchain
    project_dir: Path
    output_dir: Path
    target: str = "native_bindings"
    flags: FlagRegistry = field(default_factory=FlagRegistry)
    sources: list[Path] = field(default_factory=list)
    object_files: list[Path] = field(default_factory=list)
    runtime: RuntimeLayout | None = None
    cxx: str = ""
    linker: str = ""
    show_warnings: bool = False
    current_task: int = 0
    total_tasks: int = 0
    runner: CommandRunner = run_command

    def __post_init__(self) -> None:
        self.project_dir = Path(os.path.abspath(self.project_dir))
        self.output_dir = Path(os.path.abspath(self.output_dir))
        self.cxx = self.cxx or self.toolchain.cxx
        self.linker = self.linker or self.toolchain.linker

    @property
    def target_path(self) -> Path:
        """Path of the linked module."""
        return self.output_dir / (self.target + self.toolchain.module_suffix)

    def source_path(self, source: Path | str) -> Path:
        """Absolute path of a source, relative ones taken from project_dir."""
        return Path(os.path.abspath(self.project_dir / source))

    def object_path(self, source: Path | str) -> Path:
        """Object file produced from a source.

        The source's location under project_dir is mirrored under
        output_dir, with the toolchain's object suffix.
        """
        relative = os.path.relpath(self.source_path(source), self.project_dir)
        obj = Path(os.path.normpath(self.output_dir / relative))
        return obj.with_suffix(self.toolchain.object_suffix)

    @staticmethod
    def depfile_path(object_path: Path) -> Path:
        """Dependency file the compiler writes next to an object."""
        return object_path.with_suffix(DEPFILE_SUFFIX)

    def relative(self, path: Path | str) -> str:
        """Format a path relative to project_dir for display."""
        return os.path.relpath(path, self.project_dir)

    def start_run(self, total_tasks: int) -> None:
        """Reset progress counters for a new run."""
        self.current_task = 0
        self.total_tasks = total_tasks

    def finish_task(self) -> None:
        self.current_task += 1
