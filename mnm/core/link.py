# SPDX-License-Identifier: MIT
"""Link stage: combine the compiled objects into the native module."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mnm.core.errors import LinkError
from mnm.core.flags import LINK_FLAGS
from mnm.core.staleness import link_is_stale
from mnm.util import console

if TYPE_CHECKING:
    from pathlib import Path

    from mnm.core.build_context import BuildContext

logger = logging.getLogger(__name__)


def append_late_link_flags(ctx: BuildContext) -> None:
    """Append runtime library search paths after the user's own."""
    if ctx.runtime is not None:
        ctx.flags.append(
            LINK_FLAGS,
            [ctx.toolchain.library_dir_flag(d) for d in ctx.runtime.lib_dirs],
        )


def linker_args(ctx: BuildContext, output_path: Path) -> list[str]:
    """Build the linker argument list: objects, output, then link flags."""
    return [
        *(str(obj) for obj in ctx.object_files),
        *ctx.toolchain.link_output_args(output_path),
        *ctx.flags.get(LINK_FLAGS),
    ]


def link_objects(ctx: BuildContext) -> None:
    """Link ``ctx.object_files`` into the module unless it is up to date.

    Raises:
        LinkError: If the linker exited non-zero.
    """
    ctx.output_dir.mkdir(parents=True, exist_ok=True)
    append_late_link_flags(ctx)

    output_path = ctx.target_path
    stale = link_is_stale(output_path, ctx.object_files)
    console.progress(
        ctx.current_task + 1,
        ctx.total_tasks,
        "cxx_link",
        " ".join(ctx.relative(obj) for obj in ctx.object_files),
        ctx.relative(output_path),
        skipped=not stale,
        style="yellow",
    )
    if not stale:
        ctx.finish_task()
        return

    args = linker_args(ctx, output_path)
    logger.info("%s %s", ctx.linker, " ".join(args))
    code = ctx.runner(ctx.linker, args)
    ctx.finish_task()
    logger.info("Done linking.")
    if code != 0:
        raise LinkError(code)
