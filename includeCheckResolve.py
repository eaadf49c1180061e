#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Compute the include folders a C/C++ source tree needs, without a compiler.

PURPOSE:
    Finds the minimal set of search folders (-I paths) required to resolve every
    #include directive of a source tree, before a build is configured.

WHAT IT DOES:
    - Scans every C/C++ file under the --parse folders for #include directives
    - Resolves each include relative to its own file, then against the files
      found under the --resolve folders, then against the --include folders
    - Follows every resolved include so transitively included headers are scanned too
    - Reports the include folders needed, ambiguous includes that several
      folders can satisfy, and includes that cannot be resolved at all

METHOD:
    Purely textual: a directive is a line starting with '#include ' followed by a
    quoted or angled name. Preprocessor conditionals and macros are ignored.

REQUIREMENTS:
    - Python 3.8+
    - colorama, networkx (pydot for DOT graph export)

EXAMPLES:
    # Which -I folders does src/ need, looking for headers under external/?
    ./includeCheckResolve.py --parse src --resolve external

    # Trust include/ up front, save a JSON report and export the include graph
    ./includeCheckResolve.py --parse src --include include --resolve external \\
        --output report.json --export-graph includes.graphml

    # Read arguments from a response file (one argument per line)
    ./includeCheckResolve.py @resolve.args

Exit Codes:
    0: Success
    1: Invalid arguments
    2: Runtime error (a discovered file could not be read)
    3: Unresolved or conflicted includes found (only with --fail-on-issues)
    130: Interrupted
"""

import os
import sys
import argparse
import logging
import signal
from typing import Any, List, Optional

__version__ = "1.0.0"
__author__ = "Mana Battery"

from includecheck.color_utils import Colors, print_error, print_success, print_warning, should_use_color
from includecheck.constants import (
    EXIT_SUCCESS,
    EXIT_INVALID_ARGS,
    EXIT_ISSUES_FOUND,
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_RUNTIME_ERROR,
    ArgumentError,
    IncludeCheckError,
)
from includecheck.export_utils import export_include_graph, export_result_json
from includecheck.include_resolver import compute_include_resolve
from includecheck.report_utils import display_parse_status, format_json_output, print_result
from includecheck.resolver_types import IncludeResolverSettings

logger = logging.getLogger(__name__)

__all__ = ["EXIT_SUCCESS", "main", "create_parser"]


def signal_handler(signum: int, frame: Any) -> None:
    """Handle interrupt signals gracefully."""
    print_warning("\nInterrupted by user. Exiting...", prefix=False)
    sys.exit(EXIT_KEYBOARD_INTERRUPT)


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="Compute the include folders needed to resolve every #include of a C/C++ source tree.",
        epilog=f"Version {__version__}\n\nExamples:\n"
        f"  %(prog)s --parse src --resolve external\n"
        f"  %(prog)s --parse src --include include --resolve external --format json\n"
        f"  %(prog)s @resolve.args\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        fromfile_prefix_chars="@",
    )

    parser.add_argument(
        "--parse",
        "-p",
        dest="parse_folders",
        action="append",
        default=[],
        metavar="DIR",
        help="Folder whose C/C++ files are scanned (can be used multiple times)",
    )

    parser.add_argument(
        "--include",
        "-I",
        dest="include_folders",
        action="append",
        default=[],
        metavar="DIR",
        help="Folder trusted as an include folder without searching (can be used multiple times)",
    )

    parser.add_argument(
        "--resolve",
        "-r",
        dest="resolve_folders",
        action="append",
        default=[],
        metavar="DIR",
        help="Folder whose files may be used to resolve includes (can be used multiple times)",
    )

    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")

    parser.add_argument("--output", "-o", metavar="FILE", help="Save JSON report to file and print summary to stdout")

    parser.add_argument("--export-graph", metavar="FILE", help="Export the followed include graph (formats: .graphml, .dot, .gexf, .json)")

    parser.add_argument("--progress", action="store_true", help="Print each file as it is scanned")

    parser.add_argument("--fail-on-issues", action="store_true", help=f"Exit with code {EXIT_ISSUES_FOUND} when includes are unresolved or conflicted")

    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose debug logging")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def validate_arguments(args: argparse.Namespace) -> None:
    """Check argument combinations argparse cannot express.

    Raises:
        ArgumentError: If no folder to parse was given
    """
    if not args.parse_folders:
        raise ArgumentError("At least one --parse folder is required")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    if not should_use_color(no_color=args.no_color):
        Colors.disable()

    try:
        validate_arguments(args)
    except ArgumentError as e:
        print_error(str(e))
        return e.exit_code

    settings = IncludeResolverSettings(
        to_parse_folders=args.parse_folders,
        include_folders=args.include_folders,
        resolve_folders=args.resolve_folders,
    )

    try:
        result = compute_include_resolve(settings, display_parse_status if args.progress else None)
    except IncludeCheckError as e:
        logger.error("Resolution failed: %s", e)
        logger.debug("Exception details:", exc_info=True)
        return e.exit_code

    if args.output:
        try:
            export_result_json(args.output, result)
        except IOError as e:
            print_error(f"Cannot write to file '{args.output}': {e}")
            return EXIT_INVALID_ARGS

    if args.export_graph:
        try:
            export_include_graph(args.export_graph, result)
        except IncludeCheckError as e:
            print_error(str(e))
            return e.exit_code

    try:
        if args.format == "json" and not args.output:
            print(format_json_output(result))
        else:
            print_result(result)
            if not result.has_issues and not result.invalid_paths:
                print_success(f"\nAll includes of {len(result.parsed_files)} files resolved.", prefix=False)
    except BrokenPipeError:
        # Handle broken pipe gracefully (e.g., when piping to head)
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_SUCCESS

    if args.fail_on_issues and result.has_issues:
        return EXIT_ISSUES_FOUND
    return EXIT_SUCCESS


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print_warning("Interrupted.", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
    except IncludeCheckError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except Exception as e:
        logger.error("Unexpected error: %s", e)
        logger.debug("Exception details:", exc_info=True)
        sys.exit(EXIT_RUNTIME_ERROR)
