# SPDX-License-Identifier: MIT
"""Toolchain profile base class.

A toolchain profile captures everything that differs between the POSIX
compiler/linker and the Windows compiler/linker: tool names, file
suffixes, output flag syntax, default flags, and how library and
include flags are spelled. The build engine only talks to this
interface; it never branches on the platform itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mnm.configure.platform import get_platform

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from mnm.configure.platform import Platform


@dataclass
class RuntimeLayout:
    """Where the host runtime keeps its headers and libraries.

    Attributes:
        home: Root of the runtime installation.
        include_dirs: Directories added with the include flag at compile time.
        lib_dirs: Directories added as linker search paths at link time.
    """

    home: Path
    include_dirs: list[Path] = field(default_factory=list)
    lib_dirs: list[Path] = field(default_factory=list)


class BaseToolchain(ABC):
    """Abstract base class for toolchain profiles."""

    # Suffix of the linked native module.
    MODULE_SUFFIX = ".node"

    def __init__(self, name: str, platform: Platform | None = None) -> None:
        """Initialize a toolchain profile.

        Args:
            name: Toolchain name.
            platform: Platform to target (default: the host platform).
        """
        self._name = name
        self.platform = platform or get_platform()

    @property
    def name(self) -> str:
        return self._name

    @property
    def module_suffix(self) -> str:
        return self.MODULE_SUFFIX

    @property
    @abstractmethod
    def cxx(self) -> str:
        """Default compiler command."""
        ...

    @property
    @abstractmethod
    def linker(self) -> str:
        """Default linker command."""
        ...

    @property
    @abstractmethod
    def object_suffix(self) -> str:
        """Object file suffix, including the dot."""
        ...

    @abstractmethod
    def compile_output_args(self, object_path: Path | str) -> list[str]:
        """Arguments naming the compiler's output file."""
        ...

    @abstractmethod
    def link_output_args(self, output_path: Path | str) -> list[str]:
        """Arguments naming the linker's output file."""
        ...

    @abstractmethod
    def default_compile_flags(self) -> list[str]:
        """Flags every compile starts with."""
        ...

    @abstractmethod
    def default_link_flags(self) -> list[str]:
        """Flags every link starts with."""
        ...

    @abstractmethod
    def library_flag(self, lib: str) -> str:
        """Spell a link against library `lib`."""
        ...

    @abstractmethod
    def library_dir_flag(self, directory: Path | str) -> str:
        """Spell a linker search directory."""
        ...

    @abstractmethod
    def runtime_layout(self, home: Path) -> RuntimeLayout:
        """Locate the runtime's headers and libraries under `home`."""
        ...

    def default_libraries(self) -> list[str]:
        """Libraries every link needs (none by default)."""
        return []

    def include_flag(self, directory: Path | str) -> str:
        return f"-I{directory}"

    def warning_flags(self) -> list[str]:
        return ["-Wall"]

    def check_environment(self, environ: Mapping[str, str]) -> None:
        """Verify the process environment can run this toolchain.

        Raises:
            ConfigureError: If the environment is unusable.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, platform={self.platform.os!r})"
