#!/usr/bin/env python3
"""Tests for includecheck/include_resolver.py

End-to-end runs of the resolution engine over small trees laid out on disk.
"""

import os
from typing import Any, Callable, Dict, List, Tuple

import pytest

from includecheck import include_scanner
from includecheck.constants import FileScanError, PathError
from includecheck.include_resolver import IncludeResolver, compute_include_resolve
from includecheck.resolver_types import IncludeLocation, IncludeResolverSettings, UnresolvedInclude

from conftest import canonical


def _settings(tree: Dict[str, str]) -> IncludeResolverSettings:
    return IncludeResolverSettings(
        to_parse_folders=[tree["src"]],
        include_folders=[tree["include"]],
        resolve_folders=[tree["libA"], tree["libB"], tree["thirdparty"]],
    )


class TestResolutionOutcomes:
    """Each classification outcome on the shared source tree."""

    def test_own_directory_include(self, source_tree: Dict[str, str]) -> None:
        """Test an include next to its file is followed without other effects."""
        result = compute_include_resolve(_settings(source_tree))

        local = canonical(os.path.join(source_tree["src"], "local.hpp"))
        main = canonical(os.path.join(source_tree["src"], "main.cpp"))
        assert local in result.parsed_files
        assert (main, local) in result.include_edges
        assert "local.hpp" not in result.conflicted_includes
        assert all(u.include != "local.hpp" for u in result.unresolved_includes)
        assert canonical(source_tree["src"]) not in result.resolve_include_folders

    def test_unique_resolution_settles_folder(self, source_tree: Dict[str, str]) -> None:
        """Test an include matched by one candidate folder settles that folder."""
        result = compute_include_resolve(_settings(source_tree))

        assert canonical(source_tree["thirdparty"]) in result.resolve_include_folders
        assert "engine/core.hpp" not in result.conflicted_includes
        assert canonical(os.path.join(source_tree["thirdparty"], "engine", "core.hpp")) in result.parsed_files

    def test_resolved_files_are_scanned(self, source_tree: Dict[str, str]) -> None:
        """Test includes of a resolved third-party header are followed too."""
        result = compute_include_resolve(_settings(source_tree))

        impl = canonical(os.path.join(source_tree["thirdparty"], "engine", "detail", "impl.hpp"))
        assert impl in result.parsed_files
        assert all(u.include != "detail/impl.hpp" for u in result.unresolved_includes)

    def test_conflicted_include(self, source_tree: Dict[str, str]) -> None:
        """Test one conflict entry with every call site and every candidate folder."""
        result = compute_include_resolve(_settings(source_tree))

        conflicted = result.conflicted_includes["common/util.hpp"]
        assert conflicted.resolve_include_folders == {canonical(source_tree["libA"]), canonical(source_tree["libB"])}
        assert conflicted.include_locations == {
            IncludeLocation(canonical(os.path.join(source_tree["src"], "main.cpp")), 3),
            IncludeLocation(canonical(os.path.join(source_tree["src"], "other.cpp")), 1),
        }
        assert canonical(source_tree["libA"]) not in result.resolve_include_folders
        assert canonical(source_tree["libB"]) not in result.resolve_include_folders

    def test_conflict_candidates_are_followed(self, source_tree: Dict[str, str]) -> None:
        """Test every candidate of an ambiguous include is scanned."""
        result = compute_include_resolve(_settings(source_tree))

        assert canonical(os.path.join(source_tree["libA"], "common", "util.hpp")) in result.parsed_files
        assert canonical(os.path.join(source_tree["libB"], "common", "util.hpp")) in result.parsed_files

    def test_trusted_include_folder(self, source_tree: Dict[str, str]) -> None:
        """Test an include only found in a trusted include folder is followed."""
        result = compute_include_resolve(_settings(source_tree))

        assert canonical(source_tree["include"]) in result.resolve_include_folders
        assert canonical(os.path.join(source_tree["include"], "trusted.hpp")) in result.parsed_files
        assert "trusted.hpp" not in result.conflicted_includes

    def test_unresolved_include(self, source_tree: Dict[str, str]) -> None:
        """Test an include found nowhere is reported once with its line."""
        result = compute_include_resolve(_settings(source_tree))

        assert result.unresolved_includes == {
            UnresolvedInclude(IncludeLocation(canonical(os.path.join(source_tree["src"], "main.cpp")), 5), "missing/thing.hpp")
        }

    def test_settled_folders(self, source_tree: Dict[str, str]) -> None:
        """Test the settled folders are the trusted folder plus the unique resolution."""
        result = compute_include_resolve(_settings(source_tree))

        assert result.resolve_include_folders == {canonical(source_tree["include"]), canonical(source_tree["thirdparty"])}
        assert result.invalid_paths == frozenset()

    def test_frontier_order(self, source_tree: Dict[str, str]) -> None:
        """Test files are scanned in discovery order, each exactly once."""
        result = compute_include_resolve(_settings(source_tree))

        names = [os.path.relpath(p, canonical(source_tree["root"])).replace(os.sep, "/") for p in result.parsed_files]
        assert names == [
            "project/src/local.hpp",
            "project/src/main.cpp",
            "project/src/other.cpp",
            "libA/common/util.hpp",
            "libB/common/util.hpp",
            "thirdparty/engine/core.hpp",
            "project/include/trusted.hpp",
            "thirdparty/engine/detail/impl.hpp",
        ]
        assert len(set(result.parsed_files)) == len(result.parsed_files)


class TestScenarios:
    """Small focused scenarios."""

    def test_sibling_header(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test a/x.hpp including "y.hpp" with a/y.hpp present produces nothing to report."""
        make_file("a/x.hpp", '#include "y.hpp"\n')
        make_file("a/y.hpp", "")

        result = compute_include_resolve(IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "a")]))

        assert result.resolve_include_folders == frozenset()
        assert result.conflicted_includes == {}
        assert result.unresolved_includes == frozenset()

    def test_two_libraries_conflict(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test libA and libB both holding common/util.hpp yields one conflict."""
        make_file("src/main.cpp", '#include "common/util.hpp"\n')
        make_file("libA/common/util.hpp", "")
        make_file("libB/common/util.hpp", "")
        settings = IncludeResolverSettings(
            to_parse_folders=[os.path.join(temp_dir, "src")],
            resolve_folders=[os.path.join(temp_dir, "libA"), os.path.join(temp_dir, "libB")],
        )

        result = compute_include_resolve(settings)

        assert list(result.conflicted_includes) == ["common/util.hpp"]
        assert result.conflicted_includes["common/util.hpp"].resolve_include_folders == {
            canonical(os.path.join(temp_dir, "libA")),
            canonical(os.path.join(temp_dir, "libB")),
        }

    def test_missing_include_reported_with_line(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test missing/thing.hpp is reported once with the directive's line number."""
        path = make_file("src/main.cpp", "// header\n\n#include <missing/thing.hpp>\n")

        result = compute_include_resolve(IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src")]))

        assert result.unresolved_includes == {UnresolvedInclude(IncludeLocation(canonical(path), 3), "missing/thing.hpp")}


class TestResolutionPolicy:
    """Tie-break and dedup rules of the engine."""

    def test_conflict_not_searched_again(self, temp_dir: Any, make_file: Callable[[str, str], str], monkeypatch: Any) -> None:
        """Test a known conflicted text only gains locations."""
        make_file("src/a.cpp", '#include "dup.h"\n#include "dup.h"\n')
        make_file("src/b.cpp", '#include "dup.h"\n')
        make_file("x/dup.h", "")
        make_file("y/dup.h", "")
        resolver = IncludeResolver(
            IncludeResolverSettings(
                to_parse_folders=[os.path.join(temp_dir, "src")],
                resolve_folders=[os.path.join(temp_dir, "x"), os.path.join(temp_dir, "y")],
            )
        )
        searches: List[str] = []
        original_build = resolver._build_filename_index

        def _build_and_spy() -> None:
            original_build()
            original_find = resolver.filename_index.find_resolve_folders

            def _find(include: str) -> Any:
                searches.append(include)
                return original_find(include)

            monkeypatch.setattr(resolver.filename_index, "find_resolve_folders", _find)

        monkeypatch.setattr(resolver, "_build_filename_index", _build_and_spy)
        result = resolver.run()

        assert searches == ["dup.h"]
        assert len(result.conflicted_includes["dup.h"].include_locations) == 3

    def test_own_directory_beats_conflict(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test own-directory resolution wins even when the text is a known conflict."""
        make_file("src/a.cpp", '#include "dup.h"\n')
        make_file("src/sub/b.cpp", '#include "dup.h"\n')
        make_file("src/sub/dup.h", "")
        make_file("x/dup.h", "")
        make_file("y/dup.h", "")

        result = compute_include_resolve(
            IncludeResolverSettings(
                to_parse_folders=[os.path.join(temp_dir, "src")],
                resolve_folders=[os.path.join(temp_dir, "x"), os.path.join(temp_dir, "y")],
            )
        )

        locations = result.conflicted_includes["dup.h"].include_locations
        assert locations == {IncludeLocation(canonical(os.path.join(temp_dir, "src", "a.cpp")), 1)}

    def test_resolve_universe_before_include_folders(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test the resolve universe is consulted before trusted include folders."""
        make_file("src/a.cpp", '#include "lib/api.h"\n')
        make_file("trusted/lib/api.h", "")
        make_file("universe/lib/api.h", "")
        make_file("other/lib/api.h", "")

        result = compute_include_resolve(
            IncludeResolverSettings(
                to_parse_folders=[os.path.join(temp_dir, "src")],
                include_folders=[os.path.join(temp_dir, "trusted")],
                resolve_folders=[os.path.join(temp_dir, "universe"), os.path.join(temp_dir, "other")],
            )
        )

        assert "lib/api.h" in result.conflicted_includes
        assert canonical(os.path.join(temp_dir, "trusted", "lib", "api.h")) not in result.parsed_files

    def test_non_source_extension_found_in_include_folder(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test files outside the extension set are still found through include folders."""
        make_file("src/a.cpp", '#include "impl.inl"\n')
        make_file("inc/impl.inl", "")

        result = compute_include_resolve(
            IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src")], include_folders=[os.path.join(temp_dir, "inc")])
        )

        assert result.unresolved_includes == frozenset()
        assert canonical(os.path.join(temp_dir, "inc", "impl.inl")) in result.parsed_files

    def test_include_cycle_terminates(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test mutually including headers are each scanned once."""
        make_file("src/a.h", '#include "b.h"\n')
        make_file("src/b.h", '#include "a.h"\n')

        result = compute_include_resolve(IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src")]))

        assert len(result.parsed_files) == 2

    def test_overlapping_parse_roots_dedup(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test a file reachable from two parse roots is scanned once."""
        make_file("src/sub/a.cpp", "")

        result = compute_include_resolve(
            IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src"), os.path.join(temp_dir, "src", "sub")])
        )

        assert result.parsed_files == (canonical(os.path.join(temp_dir, "src", "sub", "a.cpp")),)

    def test_invalid_folders(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test missing configured folders are recorded as supplied and not searched."""
        make_file("src/a.cpp", '#include "x.h"\n')
        missing_include = os.path.join(temp_dir, "no_include")
        missing_resolve = os.path.join(temp_dir, "no_resolve")
        missing_parse = os.path.join(temp_dir, "no_parse")

        result = compute_include_resolve(
            IncludeResolverSettings(
                to_parse_folders=[os.path.join(temp_dir, "src"), missing_parse],
                include_folders=[missing_include],
                resolve_folders=[missing_resolve],
            )
        )

        assert result.invalid_paths == {missing_include, missing_resolve, missing_parse}
        assert result.resolve_include_folders == frozenset()
        assert len(result.unresolved_includes) == 1


class TestProgressAndErrors:
    """Progress callback and fatal error behavior."""

    def test_progress_callback(self, source_tree: Dict[str, str]) -> None:
        """Test the callback sees every file with a growing total."""
        calls: List[Tuple[int, int, str]] = []

        result = compute_include_resolve(_settings(source_tree), lambda current, total, path: calls.append((current, total, path)))

        assert [c[0] for c in calls] == list(range(1, len(result.parsed_files) + 1))
        assert [c[2] for c in calls] == list(result.parsed_files)
        assert all(total >= current for current, total, _ in calls)
        assert [c[1] for c in calls] == sorted(c[1] for c in calls)
        assert calls[0][1] == 3

    def test_failing_callback_does_not_abort(self, source_tree: Dict[str, str]) -> None:
        """Test an exception raised by the callback is logged and the run completes."""

        def _broken(current: int, total: int, path: str) -> None:
            raise RuntimeError("display failed")

        result = compute_include_resolve(_settings(source_tree), _broken)

        assert len(result.parsed_files) == 8

    def test_unreadable_file_is_fatal(self, temp_dir: Any, make_file: Callable[[str, str], str], monkeypatch: Any) -> None:
        """Test a file that cannot be read aborts the run."""
        make_file("src/a.cpp", '#include "x.h"\n')

        def refuse_open(path: Any, *args: Any, **kwargs: Any) -> Any:
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(include_scanner, "open", refuse_open, raising=False)

        with pytest.raises(FileScanError) as exc_info:
            compute_include_resolve(IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src")]))

        assert exc_info.value.path == canonical(os.path.join(temp_dir, "src", "a.cpp"))

    def test_unlistable_folder_is_fatal(self, temp_dir: Any, make_file: Callable[[str, str], str], monkeypatch: Any) -> None:
        """Test a source folder that cannot be listed aborts the run."""
        make_file("src/locked/a.cpp")
        real_scandir = os.scandir

        def scandir(path: Any) -> Any:
            if os.path.basename(path) == "locked":
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)

        with pytest.raises(FileScanError):
            compute_include_resolve(IncludeResolverSettings(to_parse_folders=[os.path.join(temp_dir, "src")]))

    def test_file_vanishing_mid_run_is_fatal(self, temp_dir: Any, make_file: Callable[[str, str], str]) -> None:
        """Test a resolved file deleted before it is queued is a scan error."""
        make_file("src/a.cpp", '#include "lib/b.h"\n')
        header = make_file("ext/lib/b.h")

        def delete_header(current: int, total: int, file_path: str) -> None:
            if os.path.exists(header):
                os.remove(header)

        settings = IncludeResolverSettings(
            to_parse_folders=[os.path.join(temp_dir, "src")],
            resolve_folders=[os.path.join(temp_dir, "ext")],
        )

        with pytest.raises(FileScanError) as exc_info:
            compute_include_resolve(settings, delete_header)

        assert isinstance(exc_info.value.__cause__, PathError)

    def test_idempotent(self, source_tree: Dict[str, str]) -> None:
        """Test two runs over an unchanged tree give identical results."""
        first = compute_include_resolve(_settings(source_tree))
        second = compute_include_resolve(_settings(source_tree))

        assert first == second
        assert sorted(first.unresolved_includes) == sorted(second.unresolved_includes)

    def test_settings_default_empty(self) -> None:
        """Test an empty configuration yields an empty result."""
        result = compute_include_resolve(IncludeResolverSettings())

        assert result.parsed_files == ()
        assert not result.has_issues
