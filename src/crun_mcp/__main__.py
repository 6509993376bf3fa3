"""Entry point for crun-mcp server."""

import argparse
import asyncio
import logging
import os
import sys

from .config import LinuxTerminal, RunConfig, parse_bool
from .server import create_server
from .utils.project import configure_workspace


def configure_logging() -> None:
    """Configure logging based on environment."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_bool_flag(value: str) -> bool:
    """argparse type for on/off flags."""
    try:
        return parse_bool(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Every option defaults to None so that CRUN_* environment variables
    still apply when a flag is not given.
    """
    parser = argparse.ArgumentParser(
        description="crun MCP Server - Compile, run and build C/C++ code via MCP"
    )
    parser.add_argument(
        "--project",
        action="append",
        default=[],
        help="Workspace project root. Repeat for several projects. "
        "Used when the client does not provide MCP roots.",
    )
    parser.add_argument("--c-compiler", default=None, help="C compiler (default: gcc)")
    parser.add_argument("--cpp-compiler", default=None, help="C++ compiler (default: g++)")
    parser.add_argument(
        "--c-compiler-options", default=None, help="Extra C compiler flags, space separated"
    )
    parser.add_argument(
        "--cpp-compiler-options",
        default=None,
        help="Extra C++ compiler flags, space separated",
    )
    parser.add_argument(
        "--run-after-compile",
        type=parse_bool_flag,
        default=None,
        help="Run the program after a successful compile (default: true)",
    )
    parser.add_argument(
        "--show-warnings",
        type=parse_bool_flag,
        default=None,
        help="Report compiler warnings (default: true)",
    )
    parser.add_argument(
        "--compile-to-tmpdir",
        type=parse_bool_flag,
        default=None,
        help="Place binaries in the temporary directory (default: true)",
    )
    parser.add_argument(
        "--linux-terminal",
        choices=[t.value for t in LinuxTerminal],
        default=None,
        help="Terminal emulator used on Linux (default: xterm)",
    )
    parser.add_argument("--debugger", default=None, help="Debugger front-end (default: gdb)")
    parser.add_argument("--make-command", default=None, help="make executable name")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> RunConfig:
    """Merge CLI flags over CRUN_* environment variables."""
    return RunConfig.from_env(
        c_compiler=args.c_compiler,
        cpp_compiler=args.cpp_compiler,
        c_compiler_options=args.c_compiler_options,
        cpp_compiler_options=args.cpp_compiler_options,
        run_after_compile=args.run_after_compile,
        show_warnings=args.show_warnings,
        compile_to_tmpdir=args.compile_to_tmpdir,
        linux_terminal=args.linux_terminal,
        debugger=args.debugger,
        make_command=args.make_command,
    )


async def main() -> None:
    """Main entry point."""
    configure_logging()
    logger = logging.getLogger(__name__)

    args = parse_args()
    try:
        config = load_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_workspace(args.project)
    logger.info(f"Starting crun MCP Server (projects: {args.project or 'from client'})...")

    mcp = create_server(config)

    try:
        await mcp.run_stdio_async()
    except Exception:
        logger.exception("Server error")
        raise
    finally:
        logger.info("Server stopped")


def run() -> None:
    """Run the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
