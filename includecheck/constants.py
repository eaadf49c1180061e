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
"""Shared constants for includeCheck tools.

This module provides centralized constants used by the include resolver and its
command line front end, together with the exception hierarchy.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_ISSUES_FOUND = 3
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Source Scanning Constants
# =============================================================================

# Extensions recognized as C/C++ sources and headers (exact, case-sensitive suffix)
CPP_FILE_EXTENSIONS = (".h", ".hpp", ".hxx", ".hh", ".c", ".cpp", ".cxx")

# A directive must start the line with exactly this text
INCLUDE_DIRECTIVE_PREFIX = "#include "

INCLUDE_OPEN_DELIMITERS = '"<'
INCLUDE_CLOSE_DELIMITERS = '">'

# Separator used for display and suffix comparisons on every platform
PRETTY_PATH_SEPARATOR = "/"

# =============================================================================
# Display Limits
# =============================================================================

MAX_CANDIDATES_DISPLAY = 20  # Maximum candidate folders listed per conflict in colored output

# =============================================================================
# Graph Export Constants
# =============================================================================

SUPPORTED_GRAPH_FORMATS = [".graphml", ".dot", ".gexf", ".json"]

# =============================================================================
# Exception Classes
# =============================================================================


class IncludeCheckError(Exception):
    """Base exception for all includeCheck errors.

    All includeCheck exceptions carry an exit_code attribute that indicates
    what exit code the program should use when this error is caught at the
    main entry point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(IncludeCheckError):
    """Raised when input validation fails (arguments, paths, etc)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class ArgumentError(ValidationError):
    """Raised when command-line arguments are invalid."""


class PathError(ValidationError):
    """Raised when a path that must exist cannot be found."""

    def __init__(self, path: str):
        super().__init__(f"Path does not exist: {path}")
        self.path = path


# Analysis/processing errors (EXIT_RUNTIME_ERROR)
class AnalysisError(IncludeCheckError):
    """Raised when analysis or processing operations fail."""


class FileScanError(AnalysisError):
    """Raised when a file discovered during resolution cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot scan '{path}': {reason}")
        self.path = path
