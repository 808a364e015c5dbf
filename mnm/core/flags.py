# SPDX-License-Identifier: MIT
"""Flag group handling for mnm.

Compiler and linker flags are collected into named groups (``CXXFLAGS``,
``LINKFLAGS``). Flags arrive from several places: toolchain defaults,
user build scripts, and include/library paths injected late at build
time. A group never holds the same token twice, and tokens keep the
order in which they were first added.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

COMPILE_FLAGS = "CXXFLAGS"
LINK_FLAGS = "LINKFLAGS"


def merge_flags(existing: list[str], new: Iterable[str]) -> None:
    """Merge new flags into existing list, avoiding duplicates.

    This modifies `existing` in place, appending tokens from `new` that
    aren't already present. Order of first insertion is preserved.

    Args:
        existing: List of existing flags (modified in place).
        new: Flags to merge in.

    Examples:
        >>> existing = ["-c", "-g"]
        >>> merge_flags(existing, ["-Wall", "-g", "-fPIC", "-Wall"])
        >>> existing
        ['-c', '-g', '-Wall', '-fPIC']
    """
    seen = set(existing)
    for flag in new:
        if flag not in seen:
            seen.add(flag)
            existing.append(flag)


class FlagRegistry:
    """Named, order-preserving, duplicate-free flag groups.

    Example:
        flags = FlagRegistry()
        flags.append("CXXFLAGS", ["-c", "-g"])
        flags.append("CXXFLAGS", "-g")  # ignored
        flags.get("CXXFLAGS")  # ['-c', '-g']
    """

    def __init__(self) -> None:
        self._groups: dict[str, list[str]] = {}

    def get(self, group: str) -> list[str]:
        """Return the group's flags, creating an empty group if needed.

        The returned list is the live group, not a copy.
        """
        return self._groups.setdefault(group, [])

    def append(self, group: str, flags: str | Iterable[str]) -> None:
        """Append one flag or a sequence of flags to a group.

        Flags already present in the group are ignored.
        """
        if isinstance(flags, str):
            flags = [flags]
        merge_flags(self.get(group), flags)

    def groups(self) -> list[str]:
        """Return the names of all groups created so far."""
        return list(self._groups)

    def __contains__(self, group: object) -> bool:
        return group in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __repr__(self) -> str:
        return f"FlagRegistry({self._groups!r})"
