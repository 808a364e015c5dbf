# SPDX-License-Identifier: MIT
"""Host platform detection."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache


@dataclass(frozen=True)
class Platform:
    """Information about the host platform.

    Attributes:
        os: Operating system name as reported by ``sys.platform``
            (e.g. 'linux', 'darwin', 'win32').
    """

    os: str

    @property
    def is_windows(self) -> bool:
        return self.os == "win32"

    @property
    def is_macos(self) -> bool:
        return self.os == "darwin"

    @property
    def is_linux(self) -> bool:
        return self.os.startswith("linux")

    @property
    def is_posix(self) -> bool:
        return not self.is_windows


@cache
def get_platform() -> Platform:
    """Return the host platform (detected once)."""
    return Platform(os=sys.platform)
