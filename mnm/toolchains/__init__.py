# SPDX-License-Identifier: MIT
"""Toolchain profiles (GCC, MSVC)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mnm.configure.platform import get_platform
from mnm.toolchains.base import BaseToolchain, RuntimeLayout
from mnm.toolchains.gcc import GccToolchain
from mnm.toolchains.msvc import MsvcToolchain

if TYPE_CHECKING:
    from mnm.configure.platform import Platform


def find_toolchain(platform: Platform | None = None) -> BaseToolchain:
    """Select the toolchain profile for a platform.

    Args:
        platform: Platform to build on (default: the host platform).

    Returns:
        MsvcToolchain on Windows, GccToolchain everywhere else.
    """
    platform = platform or get_platform()
    if platform.is_windows:
        return MsvcToolchain(platform)
    return GccToolchain(platform)


__all__ = [
    "BaseToolchain",
    "RuntimeLayout",
    "GccToolchain",
    "MsvcToolchain",
    "find_toolchain",
]
