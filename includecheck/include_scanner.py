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
"""Include directive extraction.

Directives are recognized purely by their literal text: a line has to start with
'#include ' (a single space) and contain an opening quote or angle bracket
followed by a closing quote or angle bracket. No macro expansion and no
conditional compilation handling is performed.
"""

from typing import Iterator, Optional, Tuple

from .constants import (
    FileScanError,
    INCLUDE_CLOSE_DELIMITERS,
    INCLUDE_DIRECTIVE_PREFIX,
    INCLUDE_OPEN_DELIMITERS,
)


def _find_first_of(text: str, chars: str, start: int = 0) -> int:
    positions = [pos for pos in (text.find(c, start) for c in chars) if pos >= 0]
    return min(positions) if positions else -1


def parse_include_line(line: str) -> Optional[str]:
    """Extract the include text from a single line.

    Args:
        line: Source line, with or without its line terminator

    Returns:
        The text between the delimiters, or None when the line is not a
        well-formed include directive

    Example:
        >>> parse_include_line('#include "utils/helper.hpp" // comment')
        'utils/helper.hpp'
        >>> parse_include_line('#include <vector>')
        'vector'
        >>> parse_include_line('#include "broken.h') is None
        True
    """
    if not line.startswith(INCLUDE_DIRECTIVE_PREFIX):
        return None
    remainder = line[len(INCLUDE_DIRECTIVE_PREFIX) :]

    start_pos = _find_first_of(remainder, INCLUDE_OPEN_DELIMITERS)
    if start_pos < 0:
        return None
    end_pos = _find_first_of(remainder, INCLUDE_CLOSE_DELIMITERS, start_pos + 1)
    if end_pos < 0:
        return None

    return remainder[start_pos + 1 : end_pos]


def scan_includes(file_path: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, include_text) for every include directive in a file.

    Line numbers are 1-based and only a line feed ends a line, so a lone carriage
    return stays part of its line. Each call reopens
    the file, and the handle is released once the generator is exhausted or closed.

    Raises:
        FileScanError: If the file cannot be opened or read
    """
    try:
        with open(file_path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            for line_number, line in enumerate(f, start=1):
                include = parse_include_line(line.rstrip("\r\n"))
                if include is not None:
                    yield line_number, include
    except OSError as e:
        raise FileScanError(file_path, e.strerror or str(e)) from e
