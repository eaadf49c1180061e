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
"""Path canonicalization and display helpers.

Every path stored by the resolver goes through normalize_path() so that two
spellings of the same file compare and hash equal. pretty_string() renders a
path with forward slashes only, which is also the form used for include suffix
matching.
"""

import os

from .constants import PathError, PRETTY_PATH_SEPARATOR


def to_absolute_path(path: str) -> str:
    """Return the absolute, symlink-resolved form of path without checking existence."""
    return os.path.realpath(os.path.abspath(path))


def normalize_path(path: str) -> str:
    """Canonicalize an existing path.

    Args:
        path: File or directory path, relative or absolute

    Returns:
        Absolute, symlink-resolved path

    Raises:
        PathError: If the path does not exist
    """
    if not os.path.exists(path):
        raise PathError(str(path))
    return to_absolute_path(path)


def pretty_string(path: str) -> str:
    """Render path using '/' as the only separator."""
    return str(path).replace("\\", PRETTY_PATH_SEPARATOR)
