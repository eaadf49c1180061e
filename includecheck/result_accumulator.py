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
"""Mutable accumulation of resolution outcomes during a run."""

import logging
from collections import defaultdict
from types import MappingProxyType
from typing import DefaultDict, Dict, Iterable, Set, Tuple

from .resolver_types import ConflictedInclude, IncludeLocation, IncludeResolverResult, UnresolvedInclude

logger = logging.getLogger(__name__)


class ResultAccumulator:
    """Collects invalid paths, unresolved and conflicted includes and search folders.

    Every collection only grows. finalize() freezes the state into an
    IncludeResolverResult; the accumulator should not be used afterwards.
    """

    def __init__(self) -> None:
        self.invalid_paths: Set[str] = set()
        self.unresolved_includes: Set[UnresolvedInclude] = set()
        self.resolve_include_folders: Set[str] = set()
        self.include_edges: Set[Tuple[str, str]] = set()
        self._conflict_locations: DefaultDict[str, Set[IncludeLocation]] = defaultdict(set)
        self._conflict_folders: Dict[str, Set[str]] = {}

    def add_invalid_path(self, path: str) -> None:
        self.invalid_paths.add(path)

    def add_invalid_paths(self, paths: Iterable[str]) -> None:
        self.invalid_paths.update(paths)

    def add_search_folder(self, folder: str) -> None:
        if folder not in self.resolve_include_folders:
            logger.debug("Search folder added: %s", folder)
        self.resolve_include_folders.add(folder)

    def add_unresolved(self, location: IncludeLocation, include: str) -> None:
        self.unresolved_includes.add(UnresolvedInclude(location, include))

    def add_edge(self, including_file: str, included_file: str) -> None:
        self.include_edges.add((including_file, included_file))

    def has_conflict(self, include: str) -> bool:
        return include in self._conflict_folders

    def add_conflict(self, include: str, location: IncludeLocation, folders: Iterable[str]) -> None:
        """Create the conflict entry for an include text.

        Raises:
            ValueError: If include already has a conflict entry
        """
        if include in self._conflict_folders:
            raise ValueError(f"Conflict already recorded for include: {include}")
        self._conflict_folders[include] = set(folders)
        self._conflict_locations[include].add(location)

    def add_conflict_location(self, include: str, location: IncludeLocation) -> None:
        """Record another location for an existing conflict entry.

        Raises:
            KeyError: If include has no conflict entry
        """
        if include not in self._conflict_folders:
            raise KeyError(include)
        self._conflict_locations[include].add(location)

    def finalize(self, parsed_files: Iterable[str] = ()) -> IncludeResolverResult:
        """Freeze the accumulated state into an immutable result."""
        conflicted = {
            include: ConflictedInclude(
                include_locations=frozenset(self._conflict_locations[include]),
                resolve_include_folders=frozenset(folders),
            )
            for include, folders in sorted(self._conflict_folders.items())
        }
        return IncludeResolverResult(
            invalid_paths=frozenset(self.invalid_paths),
            unresolved_includes=frozenset(self.unresolved_includes),
            conflicted_includes=MappingProxyType(conflicted),
            resolve_include_folders=frozenset(self.resolve_include_folders),
            include_edges=frozenset(self.include_edges),
            parsed_files=tuple(parsed_files),
        )
