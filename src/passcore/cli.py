"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from passcore import __version__
from passcore.constants import (
    APP_NAME,
    EXIT_COMMAND_ERROR,
    EXIT_FATAL,
    EXIT_OK,
)
from passcore.dispatch import dispatch
from passcore.errors import CommandError, FatalError
from passcore.interpreter import call, run_script_file
from passcore.logging import build_run_log_path, log_event, setup_logging
from passcore.repl import repl, report_unexpected_error
from passcore.runtime import new_session


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Run passcore command scripts or an interactive command shell.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read two files and list the resulting modules
  passcore a.txt b.txt -p "ls"

  # Chain commands; ';;' runs 'clean' after write_text
  passcore a.txt -p "write_text out.txt;; ls"

  # Run a script, logging to a file
  passcore -s build.pcs -l ~/passcore.log
        """,
    )
    parser.add_argument(
        "-s", "--script",
        help="Execute the commands in the given script file",
    )
    parser.add_argument(
        "-p", "--commands",
        action="append",
        default=[],
        help="Execute the given command line (may be given more than once)",
    )
    parser.add_argument(
        "-l", "--log",
        help="Path to log file for structured event logging",
    )
    parser.add_argument(
        "-L", "--log-dir",
        help="Directory to create a timestamped log file in",
    )
    parser.add_argument(
        "-e", "--echo",
        action="store_true",
        help="Echo every command before executing it",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Text files to read with read_text before running commands",
    )
    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse ``argv``, run the requested work and return the exit code."""
    args = _build_parser().parse_args(argv)

    log_file = args.log
    if not log_file and args.log_dir:
        log_file = build_run_log_path(args.log_dir)
    setup_logging(log_file)

    interactive = not args.commands and not args.script
    started = time.perf_counter()
    log_event(
        "app_start",
        mode="interactive" if interactive else "batch",
        script_file=args.script,
        commands=args.commands,
        input_files=args.files,
        log_file=log_file,
        echo=args.echo,
    )

    session = new_session(echo=args.echo)
    exit_code = EXIT_OK
    reason = "completed"
    try:
        if args.files:
            dispatch(session, ["read_text", *args.files])
        for line in args.commands:
            call(session, line)
        if args.script:
            run_script_file(session, args.script)
        if interactive:
            exit_code = repl(session)
    except CommandError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        exit_code = EXIT_COMMAND_ERROR
        reason = "command_error"
    except FatalError as e:
        log_event(
            "fatal_error",
            level=logging.CRITICAL,
            error_type=type(e).__name__,
            error=str(e),
        )
        print(f"FATAL: {e}", file=sys.stderr)
        exit_code = EXIT_FATAL
        reason = "fatal_error"
    except Exception as e:
        report_unexpected_error(e)
        exit_code = EXIT_COMMAND_ERROR
        reason = "unexpected_error"

    log_event(
        "app_stop",
        reason=reason,
        uptime_ms=int((time.perf_counter() - started) * 1000),
        exit_code=exit_code,
    )
    if exit_code != EXIT_FATAL:
        session.registry.teardown()
    return exit_code


def main() -> None:
    """Main entry point for passcore CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
