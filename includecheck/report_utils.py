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
"""Human-readable and JSON rendering of resolution results.

These helpers only present data. The plain format_* functions produce text
without color codes, print_result() adds colors through color_utils.
"""

import sys
import json
from typing import Any, Dict, Optional, TextIO

from .color_utils import Colors
from .constants import MAX_CANDIDATES_DISPLAY
from .path_utils import pretty_string
from .resolver_types import ConflictedInclude, IncludeLocation, IncludeResolverResult, UnresolvedInclude


def format_include_location(location: IncludeLocation) -> str:
    """Format a location as 'path:line' with '/' separators."""
    return f"{pretty_string(location.file_path)}:{location.line}"


def format_unresolved_include(unresolved: UnresolvedInclude) -> str:
    """Format an unresolved include as 'path:line : include'."""
    return f"{format_include_location(unresolved.location)} : {unresolved.include}"


def format_conflicted_include(conflicted: ConflictedInclude) -> str:
    """Format a conflict as an indented block.

    Example output:
        \\tincluded by:
        \\t[
        \\t\\t/src/a.cpp:3
        \\t]
        \\tcan be resolved by:
        \\t[
        \\t\\t/libA
        \\t\\t/libB
        \\t]
    """
    lines = ["\tincluded by:", "\t["]
    lines.extend(f"\t\t{format_include_location(location)}" for location in sorted(conflicted.include_locations))
    lines.append("\t]")
    lines.append("\tcan be resolved by:")
    lines.append("\t[")
    lines.extend(f"\t\t{pretty_string(folder)}" for folder in sorted(conflicted.resolve_include_folders))
    lines.append("\t]")
    return "\n".join(lines)


def display_parse_status(current: int, total: int, file_path: str) -> None:
    """Example parse status callback printing '[current/total] path'."""
    print(f"[{current}/{total}] {pretty_string(file_path)}")


def result_to_dict(result: IncludeResolverResult) -> Dict[str, Any]:
    """Convert a result into plain, deterministically ordered JSON-compatible data."""
    return {
        "summary": {
            "parsed_files": len(result.parsed_files),
            "resolve_include_folders": len(result.resolve_include_folders),
            "conflicted_includes": len(result.conflicted_includes),
            "unresolved_includes": len(result.unresolved_includes),
            "invalid_paths": len(result.invalid_paths),
        },
        "invalid_paths": sorted(str(path) for path in result.invalid_paths),
        "resolve_include_folders": [pretty_string(folder) for folder in sorted(result.resolve_include_folders)],
        "conflicted_includes": {
            include: {
                "included_by": [
                    {"file": pretty_string(location.file_path), "line": location.line} for location in sorted(conflicted.include_locations)
                ],
                "resolve_include_folders": [pretty_string(folder) for folder in sorted(conflicted.resolve_include_folders)],
            }
            for include, conflicted in sorted(result.conflicted_includes.items())
        },
        "unresolved_includes": [
            {"file": pretty_string(unresolved.file_path), "line": unresolved.line, "include": unresolved.include}
            for unresolved in sorted(result.unresolved_includes)
        ],
    }


def format_json_output(result: IncludeResolverResult) -> str:
    """Format a result as an indented JSON document."""
    return json.dumps(result_to_dict(result), indent=2)


def print_result(result: IncludeResolverResult, file: Optional[TextIO] = None) -> None:
    """Print the colored text report for a result.

    Args:
        result: Result to display
        file: File object (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    if result.invalid_paths:
        print(f"\n{Colors.BRIGHT}{Colors.RED}=== Invalid Paths ({len(result.invalid_paths)}) ==={Colors.RESET}", file=file)
        for path in sorted(result.invalid_paths):
            print(f"  {Colors.RED}{path}{Colors.RESET}", file=file)

    if result.unresolved_includes:
        print(f"\n{Colors.BRIGHT}{Colors.YELLOW}=== Unresolved Includes ({len(result.unresolved_includes)}) ==={Colors.RESET}", file=file)
        for unresolved in sorted(result.unresolved_includes):
            print(
                f"  {Colors.DIM}{format_include_location(unresolved.location)}{Colors.RESET} : {Colors.YELLOW}{unresolved.include}{Colors.RESET}",
                file=file,
            )

    if result.conflicted_includes:
        print(f"\n{Colors.BRIGHT}{Colors.MAGENTA}=== Conflicted Includes ({len(result.conflicted_includes)}) ==={Colors.RESET}", file=file)
        for include, conflicted in sorted(result.conflicted_includes.items()):
            print(f"{Colors.MAGENTA}{include}{Colors.RESET}", file=file)
            print(f"  {Colors.DIM}included by:{Colors.RESET}", file=file)
            for location in sorted(conflicted.include_locations):
                print(f"    {format_include_location(location)}", file=file)
            print(f"  {Colors.DIM}can be resolved by:{Colors.RESET}", file=file)
            folders = sorted(conflicted.resolve_include_folders)
            for folder in folders[:MAX_CANDIDATES_DISPLAY]:
                print(f"    {Colors.CYAN}{pretty_string(folder)}{Colors.RESET}", file=file)
            if len(folders) > MAX_CANDIDATES_DISPLAY:
                print(f"    {Colors.DIM}... and {len(folders) - MAX_CANDIDATES_DISPLAY} more{Colors.RESET}", file=file)

    print(f"\n{Colors.BRIGHT}{Colors.CYAN}=== Include Folders ({len(result.resolve_include_folders)}) ==={Colors.RESET}", file=file)
    for folder in sorted(result.resolve_include_folders):
        print(f"  {Colors.GREEN}{pretty_string(folder)}{Colors.RESET}", file=file)
