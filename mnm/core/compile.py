# SPDX-License-Identifier: MIT
"""Compile stage: turn each source file into an object file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mnm.core.errors import CompileError, NothingToCompileError
from mnm.core.flags import COMPILE_FLAGS
from mnm.core.staleness import compile_is_stale
from mnm.util import console

if TYPE_CHECKING:
    from pathlib import Path

    from mnm.core.build_context import BuildContext

logger = logging.getLogger(__name__)


def append_late_compile_flags(ctx: BuildContext) -> None:
    """Append flags that must come after everything the user set.

    Warning flags are added here because the option may be set after
    the builder was created. Runtime include paths go last so include
    directories the user added take precedence.
    """
    if ctx.show_warnings:
        ctx.flags.append(COMPILE_FLAGS, ctx.toolchain.warning_flags())
    if ctx.runtime is not None:
        ctx.flags.append(
            COMPILE_FLAGS,
            [ctx.toolchain.include_flag(d) for d in ctx.runtime.include_dirs],
        )


def compiler_args(ctx: BuildContext, source: Path, object_path: Path) -> list[str]:
    """Build the compiler argument list for one source."""
    return [
        *ctx.flags.get(COMPILE_FLAGS),
        str(source),
        *ctx.toolchain.compile_output_args(object_path),
    ]


def compile_source(ctx: BuildContext, source: Path) -> int:
    """Compile one source file unless its object is up to date.

    The object path is recorded in ``ctx.object_files`` either way.

    Returns:
        The compiler's exit code, or 0 if the compile was skipped.
    """
    source = ctx.source_path(source)
    object_path = ctx.object_path(source)
    depfile_path = ctx.depfile_path(object_path)
    object_path.parent.mkdir(parents=True, exist_ok=True)
    ctx.object_files.append(object_path)

    stale = compile_is_stale(object_path, depfile_path, source)
    console.progress(
        ctx.current_task + 1,
        ctx.total_tasks,
        "cxx",
        ctx.relative(source),
        ctx.relative(object_path),
        skipped=not stale,
    )
    if not stale:
        ctx.finish_task()
        return 0

    args = compiler_args(ctx, source, object_path)
    logger.info("%s %s", ctx.cxx, " ".join(args))
    code = ctx.runner(ctx.cxx, args)
    ctx.finish_task()
    if code != 0:
        logger.debug("%s exited with %d", ctx.cxx, code)
    return code


def compile_sources(ctx: BuildContext) -> None:
    """Compile every registered source, one at a time, in order.

    A failing file does not stop the batch: all files are attempted
    before the failure is reported.

    Raises:
        NothingToCompileError: If no sources are registered.
        CompileError: If any compile exited non-zero.
    """
    ctx.output_dir.mkdir(parents=True, exist_ok=True)
    append_late_compile_flags(ctx)

    if not ctx.sources:
        raise NothingToCompileError()

    ctx.object_files.clear()
    failed: list[Path] = []
    for source in ctx.sources:
        if compile_source(ctx, source) != 0:
            failed.append(source)

    logger.info("Done compiling.")
    if failed:
        raise CompileError(failed)
