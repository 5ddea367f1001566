"""
Command-line interface for cbuild.

Usage:
    cbuild                 # build src/*.c into bin/program
    cbuild run             # build, then run bin/program
    cbuild --run           # same as `run`
    cbuild --out hello     # build into bin/hello

Any other argument is ignored. The exit status is 0 whenever the build ran
to completion, even if some files failed to compile or the link failed; only
fatal precondition failures (missing src/, no sources, unwritable obj/ or
bin/) exit with status 1.
"""

import sys
from dataclasses import dataclass
from typing import List, Optional

from cbuild import __version__
from cbuild.build import BuildPipeline
from cbuild.build.report import render_summary
from cbuild.config import DEFAULT_OUTPUT_NAME, BuildConfig
from cbuild.output import get_output_stream, init_timer, is_verbose, log_verbose, set_verbose


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    should_run: bool = False
    output_name: str = DEFAULT_OUTPUT_NAME


def parse_args(argv: Optional[List[str]] = None) -> BuildArgs:
    """Parse command-line arguments.

    Tokens are matched exactly: "run" or "--run" request a run, and "--out"
    takes the next token as the output name whatever it looks like. Every
    other token, including "--run=yes" or "--out=name", is ignored.
    """
    tokens = sys.argv[1:] if argv is None else list(argv)
    args = BuildArgs()

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in ("run", "--run"):
            args.should_run = True
        elif token == "--out" and i + 1 < len(tokens):
            i += 1
            args.output_name = tokens[i]
        i += 1
    return args


def build_command(args: BuildArgs) -> int:
    """Run a build and return the process exit status.

    FatalError (a SystemExit) propagates and ends the process with status 1.
    """
    config = BuildConfig.from_env(should_run=args.should_run, output_name=args.output_name)
    set_verbose(config.verbose)
    log_verbose(f"cbuild v{__version__} (compiler: {config.compiler})")

    try:
        result = BuildPipeline(config).build()
        render_summary(result, get_output_stream())
        return 0

    except KeyboardInterrupt:
        print()
        print("\033[1;33m✗ Build interrupted\033[0m")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        print()
        print("\033[1;31m✗ Unexpected error\033[0m")
        print()
        print(f"{type(e).__name__}: {e}")

        if is_verbose():
            import traceback

            print()
            print("Traceback:")
            print(traceback.format_exc())

        return 1


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    init_timer()
    args = parse_args(argv)
    sys.exit(build_command(args))


if __name__ == "__main__":
    main()
