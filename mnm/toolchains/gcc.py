# SPDX-License-Identifier: MIT
"""GCC toolchain profile.

Compiles and links with g++. Objects get a ``.o`` suffix and ``-MD``
makes the compiler write a ``.d`` dependency file next to each object,
which drives incremental rebuilds.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from mnm.toolchains.base import BaseToolchain, RuntimeLayout

if TYPE_CHECKING:
    from mnm.configure.platform import Platform


class GccToolchain(BaseToolchain):
    """GCC toolchain for Linux, macOS and other POSIX hosts."""

    def __init__(self, platform: Platform | None = None) -> None:
        super().__init__("gcc", platform)

    @property
    def cxx(self) -> str:
        return "g++"

    @property
    def linker(self) -> str:
        return "g++"

    @property
    def object_suffix(self) -> str:
        return ".o"

    def compile_output_args(self, object_path: Path | str) -> list[str]:
        return ["-o", str(object_path)]

    def link_output_args(self, output_path: Path | str) -> list[str]:
        return ["-o", str(output_path)]

    def default_compile_flags(self) -> list[str]:
        return [
            "-c",
            "-D_LARGEFILE_SOURCE",
            "-D_FILE_OFFSET_BITS=64",
            "-D_GNU_SOURCE",
            "-DPIC",
            "-g",
            "-fPIC",
            "-MD",
        ]

    def default_link_flags(self) -> list[str]:
        # macOS loads addons as bundles and resolves runtime symbols at load time
        if self.platform.is_macos:
            return ["-bundle", "-undefined", "dynamic_lookup"]
        return ["-shared"]

    def library_flag(self, lib: str) -> str:
        return f"-l{lib}"

    def library_dir_flag(self, directory: Path | str) -> str:
        return f"-L{directory}"

    def runtime_layout(self, home: Path) -> RuntimeLayout:
        home = Path(home)
        return RuntimeLayout(
            home=home,
            include_dirs=[home / "include" / "node"],
            lib_dirs=[home / "lib"],
        )
