# SPDX-License-Identifier: MIT
"""Parsing of compiler-emitted dependency files.

GCC-style compilers invoked with ``-MD`` write a Make rule next to each
object file::

    build/Release/src/a.o: \\
     /abs/src/a.cpp \\
     /abs/src/a.h /abs/include/node.h

The first line holds the rule target and is dropped. Each remaining line
lists one or more dependency paths.
"""

from __future__ import annotations

import re
from pathlib import Path

_CONTINUATION_RE = re.compile(r" \\$")
_LEADING_SPACE_RE = re.compile(r"^ ")


def parse_depfile_text(text: str) -> list[str]:
    """Extract dependency paths from the text of a dependency file.

    Args:
        text: Contents of the dependency file.

    Returns:
        Dependency paths in file order. Empty tokens are discarded.

    Examples:
        >>> parse_depfile_text("a.o: \\\\\\n /src/a.cpp \\\\\\n /src/a.h\\n")
        ['/src/a.cpp', '/src/a.h']
    """
    deps: list[str] = []
    for line in text.split("\n")[1:]:
        line = _CONTINUATION_RE.sub("", line)
        line = _LEADING_SPACE_RE.sub("", line)
        deps.extend(token for token in line.split(" ") if token)
    return deps


def read_depfile(path: Path | str) -> list[str]:
    """Read and parse a dependency file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not ASCII text.
    """
    return parse_depfile_text(Path(path).read_text(encoding="ascii"))
