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
"""Base-name index over the resolve universe."""

import os
import logging
from collections import defaultdict
from typing import DefaultDict, FrozenSet, Iterable, Set

from .constants import PRETTY_PATH_SEPARATOR
from .path_utils import pretty_string

logger = logging.getLogger(__name__)


class FilenameIndex:
    """One-to-many mapping from file base name to canonical file paths.

    Built once from every file found under the resolve folders and read-only
    afterwards. Several directories may hold a file with the same name, so every
    bucket is a set.
    """

    def __init__(self, files: Iterable[str]):
        self._files_by_name: DefaultDict[str, Set[str]] = defaultdict(set)
        for file_path in files:
            self._files_by_name[os.path.basename(file_path)].add(file_path)
        logger.debug("Indexed %d distinct file names", len(self._files_by_name))

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._files_by_name.values())

    def lookup(self, base_name: str) -> FrozenSet[str]:
        """Return every indexed file whose name is exactly base_name."""
        return frozenset(self._files_by_name.get(base_name, ()))

    def find_resolve_folders(self, include: str) -> Set[str]:
        """Find every folder that resolves an include text.

        A candidate only qualifies when its '/'-rendered path ends with
        '/' + include, so a file with the right name in an unrelated directory
        structure is rejected.

        Args:
            include: Literal include text, e.g. "common/util.hpp"

        Returns:
            Set of folders F such that F joined with include is an indexed file.
            Empty when nothing matches.
        """
        suffix = PRETTY_PATH_SEPARATOR + include
        folders: Set[str] = set()
        for candidate in self.lookup(os.path.basename(include)):
            if pretty_string(candidate).endswith(suffix):
                # Separator rewriting keeps lengths, so the cut applies to the canonical path
                folders.add(candidate[: len(candidate) - len(suffix)])
        return folders
