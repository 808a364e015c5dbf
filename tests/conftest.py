# SPDX-License-Identifier: MIT
"""Shared fixtures for mnm tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mnm.configure.platform import Platform
from mnm.core.builder import Builder
from mnm.toolchains.base import RuntimeLayout
from mnm.toolchains.gcc import GccToolchain


class FakeTools:
    """Stands in for g++ as both compiler and linker.

    Records every invocation. Outputs (objects, dependency files, the
    linked module) are written with explicit, strictly increasing mtimes
    so staleness decisions never depend on filesystem timestamp
    resolution.

    Attributes:
        calls: (cmd, args) for every invocation, in order.
        fail: Source file names whose compile exits non-zero.
        link_returncode: Exit code of the linker.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.fail: set[str] = set()
        self.link_returncode = 0
        self._clock = 1_000_000.0

    def tick(self) -> float:
        self._clock += 10.0
        return self._clock

    def set_mtime(self, path: Path) -> float:
        t = self.tick()
        os.utime(path, (t, t))
        return t

    def write(self, path: Path, text: str = "") -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        self.set_mtime(path)

    @property
    def compiles(self) -> list[list[str]]:
        return [args for _, args in self.calls if "-c" in args]

    @property
    def links(self) -> list[list[str]]:
        return [args for _, args in self.calls if "-c" not in args]

    def __call__(self, cmd: str, args: list[str]) -> int:
        args = list(args)
        self.calls.append((cmd, args))
        out = Path(args[args.index("-o") + 1])
        if "-c" in args:
            source = Path(args[args.index("-o") - 1])
            if source.name in self.fail:
                return 1
            self.write(out, "object")
            self.write(out.with_suffix(".d"), f"{out}: \\\n {source}\n")
            return 0
        if self.link_returncode == 0:
            self.write(out, "module")
        return self.link_returncode


@pytest.fixture
def tools() -> FakeTools:
    return FakeTools()


@pytest.fixture
def linux() -> Platform:
    return Platform(os="linux")


@pytest.fixture
def runtime(tmp_path: Path) -> RuntimeLayout:
    home = tmp_path / "node"
    return RuntimeLayout(
        home=home,
        include_dirs=[home / "include" / "node"],
        lib_dirs=[home / "lib"],
    )


@pytest.fixture
def project(tmp_path: Path, tools: FakeTools) -> Path:
    """A project directory with src/a.cpp and src/b.cpp."""
    project_dir = tmp_path / "project"
    tools.write(project_dir / "src" / "a.cpp", "int a() { return 1; }\n")
    tools.write(project_dir / "src" / "b.cpp", "int b() { return 2; }\n")
    return project_dir


@pytest.fixture
def builder(
    project: Path, tools: FakeTools, linux: Platform, runtime: RuntimeLayout
) -> Builder:
    b = Builder(
        project_dir=project,
        toolchain=GccToolchain(linux),
        runtime=runtime,
        runner=tools,
    )
    b.append_source_dir("src")
    return b
