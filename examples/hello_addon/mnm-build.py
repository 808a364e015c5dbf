#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""Build script for a minimal native addon.

Run from this directory:
    mnm build        # compile and link build/Release/hello.node
    mnm build -v     # same, printing each command line
    mnm compile      # only compile
    mnm link         # only link
"""

import sys

import mnm


def setup(builder: mnm.Builder) -> None:
    builder.target = "hello"
    builder.append_source_dir("src")


if __name__ == "__main__":
    sys.exit(mnm.run(setup))
