# SPDX-License-Identifier: MIT
"""Command-line interface for mnm.

There are two ways in:

- A project's build script calls ``Builder.run()``, which parses the
  action and options with :func:`run_builder`.
- The ``mnm`` command (or ``python -m mnm``) finds the project's
  build script and runs it with the same arguments.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mnm.core.errors import MnmError
from mnm.util import console

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mnm.core.builder import Builder

# Set up logging
logger = logging.getLogger("mnm")

BUILD_SCRIPT = "mnm-build.py"
ACTIONS = ("build", "compile", "link", "help")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def find_script(name: str, search_dir: Path | None = None) -> Path | None:
    """Find a build script by name.

    Args:
        name: Script name (e.g., 'mnm-build.py')
        search_dir: Directory to search in (default: current dir)

    Returns:
        Path to script if found, None otherwise.
    """
    if search_dir is None:
        search_dir = Path.cwd()

    script_path = search_dir / name
    if script_path.exists() and script_path.is_file():
        return script_path

    return None


def create_parser(prog: str | None = None) -> argparse.ArgumentParser:
    """Create the parser shared by build scripts and the mnm command."""
    parser = argparse.ArgumentParser(
        prog=prog,
        usage="%(prog)s [options] action",
        description="Compile and link a native Node.js module.",
        epilog=(
            "actions:\n"
            "  build     Compile and link the native module\n"
            "  compile   Only run the compiler step.\n"
            "  link      Only run the linker step.\n"
            "  help      Show this help."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "action", nargs="?", choices=ACTIONS, metavar="action", help=argparse.SUPPRESS
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print verbose messages."
    )
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-Wall",
        "--showWarnings",
        dest="show_warnings",
        action="store_true",
        help="Show all compiler warnings.",
    )
    return parser


def run_builder(builder: Builder, argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run the requested action on a builder.

    Args:
        builder: A configured builder.
        argv: Arguments (default: ``sys.argv[1:]``).

    Returns:
        Exit code: 0 on success, 1 on any build failure.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    builder.verbose = args.verbose
    if args.show_warnings:
        builder.show_warnings = True

    if args.action == "help":
        parser.print_help()
        return 0
    if args.action is None:
        console.error("No action specified")
        parser.print_help()
        return 1

    actions = {
        "build": builder.build,
        "compile": builder.compile,
        "link": builder.link,
    }
    try:
        actions[args.action]()
    except MnmError as e:
        console.error(e.message)
        return 1
    return 0


def run(
    setup: Callable[[Builder], None],
    argv: Sequence[str] | None = None,
    **builder_args: Any,
) -> int:
    """Create a builder, let a build script set it up, and run it.

    Configuration errors (no Visual Studio prompt, runtime not found)
    are reported like build errors instead of as a traceback::

        def setup(builder):
            builder.append_source_dir("src")

        sys.exit(mnm.run(setup))

    Args:
        setup: Called with the new builder to register sources and flags.
        argv: Arguments (default: ``sys.argv[1:]``).
        **builder_args: Passed to the Builder constructor.

    Returns:
        Exit code: 0 on success, 1 on failure.
    """
    from mnm.core.builder import Builder

    try:
        builder = Builder(**builder_args)
    except MnmError as e:
        console.error(e.message)
        return 1
    setup(builder)
    return run_builder(builder, argv)


def forward_args(args: argparse.Namespace) -> list[str]:
    """Rebuild the command line to hand to a build script."""
    forwarded = [args.action]
    if args.verbose:
        forwarded.append("--verbose")
    if args.debug:
        forwarded.append("--debug")
    if args.show_warnings:
        forwarded.append("--showWarnings")
    return forwarded


def run_script(script_path: Path, args: list[str]) -> int:
    """Execute a Python build script.

    Args:
        script_path: Path to the script to run.
        args: Arguments to pass to it.

    Returns:
        Exit code from script execution.
    """
    logger.info("Running %s", script_path)
    try:
        result = subprocess.run(
            [sys.executable, str(script_path), *args],
            cwd=script_path.parent,
        )
        return result.returncode
    except OSError as e:
        logger.error("Failed to run script: %s", e)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the mnm command."""
    parser = create_parser(prog="mnm")
    from mnm import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-b", "--build-script", help=f"Path to the build script (default: {BUILD_SCRIPT})"
    )
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    if args.action == "help":
        parser.print_help()
        return 0
    if args.action is None:
        console.error("No action specified")
        parser.print_help()
        return 1

    script: Path
    if args.build_script:
        script = Path(args.build_script)
        if not script.is_file():
            console.error(f"Build script not found: {args.build_script}")
            return 1
    else:
        found_script = find_script(BUILD_SCRIPT)
        if found_script is None:
            console.error(f"No {BUILD_SCRIPT} found in current directory")
            return 1
        script = found_script

    return run_script(script.absolute(), forward_args(args))


if __name__ == "__main__":
    sys.exit(main())
