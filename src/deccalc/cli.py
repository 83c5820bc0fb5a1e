"""
DecCalc CLI interface

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import argparse
import datetime
import json
import logging
import os
import sys
from typing import List, Optional

from colorama import just_fix_windows_console

from .config import DIVIDE_BY_ZERO_TEXT, TAN_UNDEFINED_TEXT, get_settings
from .dispatch import Calculator
from .domain import ToolRequest
from .formatting import BoxStyle, print_box, print_tool_result
from .logger import setup_logging, get_logger
from .server import run_server


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="DecCalc - arbitrary-precision calculator tools over MCP."
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file (logging to file is enabled by default).",
    )
    parser.add_argument(
        "--log-dir",
        help="Directory to store log files (default: DECCALC_LOG_DIR or logs).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the MCP server.")
    serve.add_argument(
        "--transport",
        choices=["sse", "stdio"],
        default="stdio",
        help="Transport method to use (default: stdio).",
    )
    serve.add_argument(
        "--precision",
        type=int,
        help="Initial number of significant digits (default: DECCALC_PRECISION or 20).",
    )

    call = subparsers.add_parser("call", help="Run a single tool and print the result.")
    call.add_argument("tool", help="Name of the tool to run.")
    call.add_argument(
        "-a",
        "--args",
        default="{}",
        help='Tool arguments as a JSON object, e.g. \'{"numbers": [1, 2]}\'.',
    )
    call.add_argument(
        "--precision",
        type=int,
        help="Number of significant digits for this call.",
    )
    call.add_argument(
        "--output-only",
        action="store_true",
        help="Only print the result text (useful for piping).",
    )

    subparsers.add_parser("tools", help="List the available tools.")

    return parser.parse_args(argv)


def call_tool(args: argparse.Namespace, precision: int) -> int:
    """Run one tool in-process and print its result. Returns the exit code."""
    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid arguments JSON: {e}", file=sys.stderr)
        return 1
    if not isinstance(arguments, dict):
        print("Error: Tool arguments must be a JSON object", file=sys.stderr)
        return 1

    calculator = Calculator(precision)
    result = calculator.execute(ToolRequest(name=args.tool, arguments=arguments))

    if args.output_only:
        stream = sys.stdout if result.success else sys.stderr
        print(result.content, file=stream)
    else:
        if not result.success:
            style = BoxStyle.ERROR
        elif DIVIDE_BY_ZERO_TEXT in result.content or TAN_UNDEFINED_TEXT in result.content:
            style = BoxStyle.SENTINEL
        else:
            style = BoxStyle.RESULT
        print_tool_result(result.tool_name, arguments, result.content, style)

    return 0 if result.success else 1


def list_tools() -> int:
    calculator = Calculator()
    width = max(len(name) for name in calculator.tool_names)
    lines = [
        f"{name.ljust(width)}  {calculator.describe(name)}"
        for name in calculator.tool_names
    ]
    print_box("Calculator tools", lines, style=BoxStyle.INFO)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Handles:
    - Argument parsing
    - Settings and logging setup
    - Dispatching to the selected command
    """
    args = parse_args(argv)
    settings = get_settings(
        precision=getattr(args, "precision", None),
        log_dir=args.log_dir,
    )

    log_file_path = None
    if not args.no_log_file:
        os.makedirs(settings.log_dir, exist_ok=True)
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = os.path.join(settings.log_dir, f"deccalc_{timestamp}.jsonl")

    setup_logging(
        log_file=log_file_path,
        level=logging.DEBUG if args.debug else logging.INFO,
        quiet_console=not args.debug,
    )
    logger = get_logger()
    logger.debug(
        f"Running command {args.command}",
        extra={"event_type": "execution_start", "category": "execution_flow", "command_args": vars(args)},
    )

    if args.command == "serve":
        run_server(transport=args.transport, precision=settings.precision)
        return 0
    just_fix_windows_console()
    if args.command == "call":
        return call_tool(args, settings.precision)
    return list_tools()


def run() -> None:
    """
    Run the application.

    This function is the entry point for the console script.
    """
    logger = logging.getLogger("deccalc")
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        # Bad configuration values (environment or flags)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Application error: {e}",
            exc_info=True,
            extra={
                "event_type": "execution_error",
                "category": "error",
                "error_type": type(e).__name__,
            },
        )
        sys.exit(1)


if __name__ == "__main__":
    run()
