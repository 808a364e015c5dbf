# SPDX-License-Identifier: MIT
"""Tests for the link stage."""

from __future__ import annotations

from pathlib import Path

import pytest

from mnm.configure.platform import Platform
from mnm.core.build_context import BuildContext
from mnm.core.errors import LinkError
from mnm.core.flags import LINK_FLAGS
from mnm.core.link import append_late_link_flags, link_objects, linker_args
from mnm.toolchains.base import RuntimeLayout
from mnm.toolchains.gcc import GccToolchain
from mnm.toolchains.msvc import MsvcToolchain


@pytest.fixture
def ctx(project: Path, tools, runtime: RuntimeLayout) -> BuildContext:
    context = BuildContext(
        toolchain=GccToolchain(Platform("linux")),
        project_dir=project,
        output_dir=project / "build" / "Release",
        runtime=runtime,
        runner=tools,
    )
    context.flags.append(LINK_FLAGS, "-shared")
    for name in ("a.o", "b.o"):
        obj = context.output_dir / "src" / name
        tools.write(obj)
        context.object_files.append(obj)
    context.start_run(1)
    return context


class TestLinkerArgs:
    def test_gcc_layout(self, ctx: BuildContext, runtime: RuntimeLayout):
        append_late_link_flags(ctx)
        out = ctx.target_path
        assert linker_args(ctx, out) == [
            *(str(o) for o in ctx.object_files),
            "-o",
            str(out),
            "-shared",
            f"-L{runtime.lib_dirs[0]}",
        ]

    def test_msvc_layout(self, tmp_path: Path):
        ctx = BuildContext(
            toolchain=MsvcToolchain(Platform("win32")),
            project_dir=tmp_path,
            output_dir=tmp_path / "out",
        )
        ctx.flags.append(LINK_FLAGS, ["-dll", "node.lib"])
        ctx.object_files.append(tmp_path / "out" / "a.obj")
        out = ctx.target_path
        assert linker_args(ctx, out) == [
            str(tmp_path / "out" / "a.obj"),
            f"-out:{out}",
            "-dll",
            "node.lib",
        ]


class TestLinkObjects:
    def test_links_when_output_missing(self, ctx: BuildContext, tools):
        link_objects(ctx)
        assert len(tools.links) == 1
        args = tools.links[0]
        for obj in ctx.object_files:
            assert args.count(str(obj)) == 1
        assert ctx.target_path.exists()
        assert ctx.current_task == 1

    def test_skips_when_up_to_date(self, ctx: BuildContext, tools, capsys):
        tools.write(ctx.target_path)
        link_objects(ctx)
        assert tools.links == []
        assert ctx.current_task == 1
        assert "SKIPPING cxx_link" in capsys.readouterr().out

    def test_relinks_when_object_newer(self, ctx: BuildContext, tools):
        tools.write(ctx.target_path)
        tools.set_mtime(ctx.object_files[0])
        link_objects(ctx)
        assert len(tools.links) == 1

    def test_relinks_when_object_missing(self, ctx: BuildContext, tools):
        tools.write(ctx.target_path)
        ctx.object_files[1].unlink()
        link_objects(ctx)
        assert len(tools.links) == 1

    def test_failure_raises(self, ctx: BuildContext, tools):
        tools.link_returncode = 2
        with pytest.raises(LinkError, match="Failed to link") as excinfo:
            link_objects(ctx)
        assert excinfo.value.returncode == 2

    def test_uses_configured_linker(self, ctx: BuildContext, tools):
        ctx.linker = "clang++"
        link_objects(ctx)
        assert tools.calls[-1][0] == "clang++"

    def test_progress_line(self, ctx: BuildContext, capsys):
        link_objects(ctx)
        out = capsys.readouterr().out
        objs = " ".join(str(Path("build") / "Release" / "src" / n) for n in ("a.o", "b.o"))
        target = Path("build") / "Release" / "native_bindings.node"
        assert f"[1/1] cxx_link: {objs} -> {target}" in out

    def test_search_dirs_added_once(self, ctx: BuildContext, runtime: RuntimeLayout):
        link_objects(ctx)
        link_objects(ctx)
        assert ctx.flags.get(LINK_FLAGS).count(f"-L{runtime.lib_dirs[0]}") == 1
