# SPDX-License-Identifier: MIT
"""MSVC toolchain profile (Windows only).

Expects to run from a Visual Studio command prompt, where cl.exe and
link.exe are on PATH and the compiler environment is set up.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from mnm.core.errors import ConfigureError
from mnm.toolchains.base import BaseToolchain, RuntimeLayout

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mnm.configure.platform import Platform

# Any one of these marks a Visual Studio prompt.
VS_PROMPT_VARS = ("VCINSTALLDIR", "VS100COMNTOOLS")

_LIB_SUFFIX_RE = re.compile(r"(?:\.lib)?$", re.IGNORECASE)


class MsvcToolchain(BaseToolchain):
    """Microsoft Visual C++ toolchain."""

    def __init__(self, platform: Platform | None = None) -> None:
        super().__init__("msvc", platform)

    @property
    def cxx(self) -> str:
        return "cl.exe"

    @property
    def linker(self) -> str:
        return "link.exe"

    @property
    def object_suffix(self) -> str:
        return ".obj"

    def compile_output_args(self, object_path: Path | str) -> list[str]:
        return [f"-Fo{object_path}"]

    def link_output_args(self, output_path: Path | str) -> list[str]:
        return [f"-out:{output_path}"]

    def default_compile_flags(self) -> list[str]:
        return [
            "-c",
            "-nologo",
            "-DWIN32",
            "-D_WINDOWS",
            "-D_WINDLL",
            "-EHsc",
            "-Oi-",
            "-Od",
            "-Gd",
            "-analyze-",
        ]

    def default_link_flags(self) -> list[str]:
        return [
            "-nologo",
            "-dll",
            "-MANIFEST:NO",
            "-SUBSYSTEM:WINDOWS",
            "-TLBID:1",
            "-DYNAMICBASE",
            "-NXCOMPAT",
            "-MACHINE:X86",
        ]

    def default_libraries(self) -> list[str]:
        return ["node", "uv"]

    def library_flag(self, lib: str) -> str:
        """Return ``<lib>.lib``, without doubling an existing suffix."""
        return _LIB_SUFFIX_RE.sub(".lib", lib, count=1)

    def library_dir_flag(self, directory: Path | str) -> str:
        return f"-LIBPATH:{directory}"

    def runtime_layout(self, home: Path) -> RuntimeLayout:
        # A Windows runtime home is a source checkout with a Release build
        home = Path(home)
        lib_dir = home / "Release"
        return RuntimeLayout(
            home=home,
            include_dirs=[
                home / "src",
                home / "deps" / "v8" / "include",
                home / "deps" / "uv" / "include",
            ],
            lib_dirs=[lib_dir / "lib", lib_dir],
        )

    def check_environment(self, environ: Mapping[str, str]) -> None:
        if not any(environ.get(var) for var in VS_PROMPT_VARS):
            raise ConfigureError(
                "You appear to not be running in a Visual Studio prompt."
            )
        logger.debug("Visual Studio prompt detected")
