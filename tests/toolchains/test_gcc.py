# SPDX-License-Identifier: MIT
"""Tests for mnm.toolchains.gcc."""

from pathlib import Path

from mnm.configure.platform import Platform
from mnm.toolchains.gcc import GccToolchain


class TestGccToolchain:
    def test_creation(self):
        tc = GccToolchain(Platform("linux"))
        assert tc.name == "gcc"
        assert tc.cxx == "g++"
        assert tc.linker == "g++"

    def test_suffixes(self):
        tc = GccToolchain(Platform("linux"))
        assert tc.object_suffix == ".o"
        assert tc.module_suffix == ".node"

    def test_output_args(self):
        tc = GccToolchain(Platform("linux"))
        assert tc.compile_output_args(Path("/out/a.o")) == ["-o", str(Path("/out/a.o"))]
        assert tc.link_output_args("/out/m.node") == ["-o", "/out/m.node"]

    def test_default_compile_flags(self):
        flags = GccToolchain(Platform("linux")).default_compile_flags()
        assert flags[0] == "-c"
        assert "-MD" in flags
        assert "-fPIC" in flags
        assert len(flags) == len(set(flags))

    def test_linux_link_flags(self):
        assert GccToolchain(Platform("linux")).default_link_flags() == ["-shared"]

    def test_macos_link_flags(self):
        assert GccToolchain(Platform("darwin")).default_link_flags() == [
            "-bundle",
            "-undefined",
            "dynamic_lookup",
        ]

    def test_library_flags(self):
        tc = GccToolchain(Platform("linux"))
        assert tc.library_flag("uv") == "-luv"
        assert tc.library_dir_flag("/opt/lib") == "-L/opt/lib"
        assert tc.include_flag("/opt/include") == "-I/opt/include"
        assert tc.warning_flags() == ["-Wall"]
        assert tc.default_libraries() == []

    def test_runtime_layout(self, tmp_path: Path):
        layout = GccToolchain(Platform("linux")).runtime_layout(tmp_path)
        assert layout.home == tmp_path
        assert layout.include_dirs == [tmp_path / "include" / "node"]
        assert layout.lib_dirs == [tmp_path / "lib"]

    def test_environment_always_usable(self):
        GccToolchain(Platform("linux")).check_environment({})

    def test_repr(self):
        assert repr(GccToolchain(Platform("linux"))) == "GccToolchain('gcc', platform='linux')"
