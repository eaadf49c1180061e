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
"""File discovery utilities for C/C++ source trees."""

import os
import logging
from typing import List, Sequence, Tuple

from .constants import CPP_FILE_EXTENSIONS, FileScanError
from .path_utils import to_absolute_path

logger = logging.getLogger(__name__)


def is_cpp_file(file_path: str) -> bool:
    """Check whether a file name ends with a recognized C/C++ extension.

    The comparison is an exact, case-sensitive suffix match, so 'FOO.H' is not
    considered a header.
    """
    return str(file_path).endswith(CPP_FILE_EXTENSIONS)


def _collect_cpp_files(folder_path: str, cpp_file_list: List[str]) -> None:
    # Sorted traversal keeps the order stable for a given filesystem snapshot
    try:
        with os.scandir(folder_path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FileScanError(folder_path, e.strerror or str(e)) from e
    for entry in entries:
        if entry.is_dir():
            _collect_cpp_files(entry.path, cpp_file_list)
        elif entry.is_file() and is_cpp_file(entry.name):
            cpp_file_list.append(to_absolute_path(entry.path))


def enumerate_source_files(roots: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Recursively collect every C/C++ file below a list of root folders.

    Args:
        roots: Ordered root directories to walk

    Returns:
        Tuple of (files, invalid_roots)
        - files: Canonical paths of matching files, in discovery order
        - invalid_roots: Roots that do not exist, exactly as supplied

    Raises:
        FileScanError: If a folder below an existing root cannot be listed
    """
    files: List[str] = []
    invalid_roots: List[str] = []

    for root in roots:
        if not os.path.isdir(root):
            logger.warning("Skipping missing folder: %s", root)
            invalid_roots.append(root)
            continue
        before = len(files)
        _collect_cpp_files(root, files)
        logger.debug("Found %d C/C++ files under %s", len(files) - before, root)

    return files, invalid_roots
