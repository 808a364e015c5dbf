# SPDX-License-Identifier: MIT
"""Timestamp-based staleness checks.

Both checks fail open: whenever incremental state is missing or cannot be
read, the artifact is reported as stale so the build can always fall back
to a full rebuild.
"""

from __future__ import annotations

import logging
import math
import os
from typing import TYPE_CHECKING

from mnm.core.depfile import read_depfile

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

# Newest time of an empty input set.
OLDEST_TIME = 0.0
# Time of a target that does not exist yet; older than OLDEST_TIME so that
# an empty input set still rebuilds a missing target.
MISSING_TIME = -math.inf


def get_mtime(path: Path | str) -> float:
    """Return the modification time of a target, or MISSING_TIME if absent."""
    try:
        return os.stat(path).st_mtime
    except FileNotFoundError:
        return MISSING_TIME


def get_max_mtime(paths: Iterable[Path | str]) -> float:
    """Return the newest modification time among existing inputs.

    Raises:
        OSError: If any input cannot be stat'ed.
    """
    max_time = OLDEST_TIME
    for path in paths:
        max_time = max(max_time, os.stat(path).st_mtime)
    return max_time


def is_older(target: Path | str, inputs: Iterable[Path | str]) -> bool:
    """Check whether target is strictly older than the newest input.

    Equal timestamps count as up to date.

    Raises:
        OSError: If any input cannot be stat'ed.
    """
    return get_mtime(target) < get_max_mtime(inputs)


def compile_is_stale(
    object_path: Path | str,
    depfile_path: Path | str,
    source: Path | str | None = None,
) -> bool:
    """Decide whether an object file must be recompiled.

    Args:
        object_path: The object file produced by a previous compile.
        depfile_path: The dependency file written alongside it.
        source: The source file, checked in addition to the listed
            dependencies. GCC may write it on the rule's first line,
            which the dependency file parser skips.

    Returns:
        True if the object is missing, the dependency file is missing or
        unreadable, any listed dependency is missing, or any dependency is
        newer than the object.
    """
    try:
        deps: list[Path | str] = list(read_depfile(depfile_path))
        if source is not None:
            deps.append(source)
        return is_older(object_path, deps)
    except (OSError, ValueError) as e:
        logger.debug("Treating %s as stale: %s", object_path, e)
        return True


def link_is_stale(output_path: Path | str, object_paths: Iterable[Path | str]) -> bool:
    """Decide whether the linked artifact must be relinked.

    Returns:
        True if the artifact is missing, any object cannot be stat'ed, or
        any object is newer than the artifact.
    """
    try:
        return is_older(output_path, object_paths)
    except OSError as e:
        logger.debug("Treating %s as stale: %s", output_path, e)
        return True
