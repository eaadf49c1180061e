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
"""Compute the search folders needed to resolve every include of a source tree.

The resolver never invokes a compiler. It scans the project's own files for
include directives and, for each one, tries in order:

    1. the including file's own directory
    2. an include text already known to be ambiguous (location is added to it)
    3. the resolve universe, searched by base name and matched on full path suffix
    4. the search folders settled so far
    5. otherwise the include is reported as unresolved

Every file reached through a successful resolution is appended to the frontier
and scanned later in the same run, so headers pulled in from third-party trees
are followed as well.

Usage:
    settings = IncludeResolverSettings(to_parse_folders=["src"], include_folders=["include"], resolve_folders=["external"])
    result = compute_include_resolve(settings)
    for folder in sorted(result.resolve_include_folders):
        print(f"-I{folder}")
"""

import os
import logging
from typing import List, Optional, Set

from .constants import FileScanError, PathError
from .file_utils import enumerate_source_files
from .filename_index import FilenameIndex
from .include_scanner import scan_includes
from .path_utils import normalize_path
from .resolver_types import IncludeLocation, IncludeResolverResult, IncludeResolverSettings, ParseStatusCallback
from .result_accumulator import ResultAccumulator

logger = logging.getLogger(__name__)


class IncludeResolver:
    """Worklist engine for a single resolution run.

    All state is owned by the instance. The frontier is an append-only list
    drained with an explicit cursor, so files discovered while scanning are
    processed later in the same pass.
    """

    def __init__(self, settings: IncludeResolverSettings, parse_status_callback: Optional[ParseStatusCallback] = None):
        self.settings = settings
        self.parse_status_callback = parse_status_callback
        self.accumulator = ResultAccumulator()
        self.frontier: List[str] = []
        self.seen_files: Set[str] = set()
        self.filename_index = FilenameIndex(())

    def _validate_include_folders(self) -> None:
        for include_folder in self.settings.include_folders:
            if os.path.isdir(include_folder):
                self.accumulator.add_search_folder(normalize_path(include_folder))
            else:
                logger.warning("Include folder does not exist: %s", include_folder)
                self.accumulator.add_invalid_path(include_folder)

    def _build_filename_index(self) -> None:
        resolve_files, invalid_roots = enumerate_source_files(self.settings.resolve_folders)
        self.accumulator.add_invalid_paths(invalid_roots)
        self.filename_index = FilenameIndex(resolve_files)
        logger.info("Resolve universe: %d files", len(self.filename_index))

    def _seed_frontier(self) -> None:
        files_to_parse, invalid_roots = enumerate_source_files(self.settings.to_parse_folders)
        self.accumulator.add_invalid_paths(invalid_roots)
        for file_path in files_to_parse:
            self._enqueue(file_path)
        logger.info("Initial files to parse: %d", len(self.frontier))

    def _enqueue(self, file_path: str) -> str:
        try:
            canonical_path = normalize_path(file_path)
        except PathError as e:
            # Discovered files can disappear between the walk and the scan
            raise FileScanError(file_path, "file vanished during the run") from e
        if canonical_path not in self.seen_files:
            self.seen_files.add(canonical_path)
            self.frontier.append(canonical_path)
        return canonical_path

    def _follow(self, including_file: str, included_file: str) -> None:
        self.accumulator.add_edge(including_file, self._enqueue(included_file))

    def _find_in_search_folders(self, include: str) -> Optional[str]:
        for folder in sorted(self.accumulator.resolve_include_folders):
            candidate = os.path.join(folder, include)
            if os.path.isfile(candidate):
                return candidate
        return None

    def _report_status(self, current: int, file_path: str) -> None:
        if self.parse_status_callback is None:
            return
        try:
            self.parse_status_callback(current, len(self.frontier), file_path)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Parse status callback failed for %s: %s", file_path, e, exc_info=True)

    def _resolve_include(self, file_path: str, line: int, include: str) -> None:
        own_directory_path = os.path.join(os.path.dirname(file_path), include)
        if os.path.isfile(own_directory_path):
            self._follow(file_path, own_directory_path)
            return

        location = IncludeLocation(file_path, line)
        if self.accumulator.has_conflict(include):
            self.accumulator.add_conflict_location(include, location)
            return

        resolve_folders = self.filename_index.find_resolve_folders(include)
        if len(resolve_folders) == 1:
            (resolve_folder,) = resolve_folders
            self.accumulator.add_search_folder(resolve_folder)
            self._follow(file_path, os.path.join(resolve_folder, include))
            return
        if resolve_folders:
            logger.debug("Conflicted include '%s' at %s:%d (%d candidates)", include, file_path, line, len(resolve_folders))
            self.accumulator.add_conflict(include, location, resolve_folders)
            for resolve_folder in sorted(resolve_folders):
                self._follow(file_path, os.path.join(resolve_folder, include))
            return

        found = self._find_in_search_folders(include)
        if found is not None:
            self._follow(file_path, found)
            return

        logger.debug("Unresolved include '%s' at %s:%d", include, file_path, line)
        self.accumulator.add_unresolved(location, include)

    def run(self) -> IncludeResolverResult:
        """Execute the resolution run to completion.

        Returns:
            Immutable IncludeResolverResult

        Raises:
            FileScanError: If a discovered file cannot be read or a source folder cannot be listed
        """
        self._validate_include_folders()
        self._build_filename_index()
        self._seed_frontier()

        index = 0
        while index < len(self.frontier):
            file_path = self.frontier[index]
            index += 1
            self._report_status(index, file_path)
            for line, include in scan_includes(file_path):
                self._resolve_include(file_path, line, include)

        result = self.accumulator.finalize(self.frontier)
        logger.info(
            "Parsed %d files: %d search folders, %d conflicted, %d unresolved, %d invalid paths",
            len(result.parsed_files),
            len(result.resolve_include_folders),
            len(result.conflicted_includes),
            len(result.unresolved_includes),
            len(result.invalid_paths),
        )
        return result


def compute_include_resolve(settings: IncludeResolverSettings, parse_status_callback: Optional[ParseStatusCallback] = None) -> IncludeResolverResult:
    """Compute every search folder needed to resolve the includes of a source tree.

    Args:
        settings: Folders to parse, trusted include folders and resolve folders
        parse_status_callback: Optional callback(current, total, file_path) invoked
            once per file as it begins scanning; total may grow between calls

    Returns:
        Immutable IncludeResolverResult
    """
    return IncludeResolver(settings, parse_status_callback).run()
