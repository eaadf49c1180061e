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
"""Type definitions for include resolution.

This module contains the settings and result dataclasses shared by the resolver,
the reporting helpers and the exporters.
"""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Mapping, Tuple


@dataclass
class IncludeResolverSettings:
    """Input folders for a resolution run.

    Attributes:
        to_parse_folders: Folders whose C/C++ files are scanned (the project's own tree)
        include_folders: Folders trusted a priori as search folders
        resolve_folders: Folders whose files may be used to resolve includes
    """

    to_parse_folders: List[str] = field(default_factory=list)
    include_folders: List[str] = field(default_factory=list)
    resolve_folders: List[str] = field(default_factory=list)


@dataclass(frozen=True, order=True)
class IncludeLocation:
    """A directive position: file path and 1-based line number."""

    file_path: str
    line: int


@dataclass(frozen=True, order=True)
class UnresolvedInclude:
    """An include text that no search could resolve, with where it was written."""

    location: IncludeLocation
    include: str

    @property
    def file_path(self) -> str:
        return self.location.file_path

    @property
    def line(self) -> int:
        return self.location.line


@dataclass(frozen=True)
class ConflictedInclude:
    """An include text that several folders can resolve.

    Attributes:
        include_locations: Every location where the include text is written
        resolve_include_folders: Every folder that resolves the include text
    """

    include_locations: FrozenSet[IncludeLocation]
    resolve_include_folders: FrozenSet[str]


@dataclass(frozen=True)
class IncludeResolverResult:
    """Final outcome of a resolution run.

    Attributes:
        invalid_paths: Configured folders that do not exist, exactly as supplied
        unresolved_includes: One entry per (location, include text) that could not be resolved
        conflicted_includes: Include text -> ConflictedInclude for ambiguous includes
        resolve_include_folders: Search folders needed to resolve every resolvable include
        include_edges: (including file, included file) pairs followed during the run
        parsed_files: Every scanned file in scan order
    """

    invalid_paths: FrozenSet[str]
    unresolved_includes: FrozenSet[UnresolvedInclude]
    conflicted_includes: Mapping[str, ConflictedInclude]
    resolve_include_folders: FrozenSet[str]
    include_edges: FrozenSet[Tuple[str, str]] = frozenset()
    parsed_files: Tuple[str, ...] = ()

    @property
    def has_issues(self) -> bool:
        """True when at least one include is unresolved or conflicted."""
        return bool(self.unresolved_includes or self.conflicted_includes)


# Called once per file as it begins scanning: (current, total_known, file_path)
ParseStatusCallback = Callable[[int, int, str], None]
