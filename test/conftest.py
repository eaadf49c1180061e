#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#****************************************************************************************************************************************************
"""Pytest configuration and shared fixtures for includeCheck tests.

Fixtures lay out small C/C++ trees on disk. The resolver works on canonical
paths, so expected values are built with canonical() rather than raw tmp paths.

Fixture Scopes:
- function: Default, recreated for each test
"""

import os
import sys
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def canonical(path: str) -> str:
    """Canonical form used by the resolver for an existing path."""
    return os.path.realpath(os.path.abspath(str(path)))


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: File I/O operations that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="includecheck_test_")
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def make_file(temp_dir: str) -> Callable[[str, str], str]:
    """Return a helper writing a file relative to temp_dir and returning its path.

    Scope: function
    Dependencies: temp_dir
    """

    def _make_file(relative_path: str, content: str = "") -> str:
        file_path = Path(temp_dir) / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return str(file_path)

    return _make_file


@pytest.fixture
def source_tree(temp_dir: str, make_file: Callable[[str, str], str]) -> Dict[str, str]:
    """Create a project exercising every resolution outcome.

    Layout:
        project/src/main.cpp       own-directory, conflicted, unique, unresolved and trusted includes
        project/src/local.hpp      resolved next to main.cpp
        project/src/other.cpp      second location of the conflicted include
        project/include/trusted.hpp
        libA/common/util.hpp       } both resolve "common/util.hpp"
        libB/common/util.hpp       }
        thirdparty/engine/core.hpp uniquely resolves "engine/core.hpp"
        thirdparty/engine/detail/impl.hpp  reached from core.hpp by its own directory

    Returns:
        Dictionary of folder names to their paths (as written, not canonical)
    """
    make_file(
        "project/src/main.cpp",
        "// main\n"
        '#include "local.hpp"\n'
        '#include "common/util.hpp"\n'
        '#include "engine/core.hpp"\n'
        '#include "missing/thing.hpp"\n'
        "#include <trusted.hpp>\n"
        "int main() { return 0; }\n",
    )
    make_file("project/src/local.hpp", "#pragma once\n")
    make_file("project/src/other.cpp", '#include "common/util.hpp"\n')
    make_file("project/include/trusted.hpp", "#pragma once\n")
    make_file("libA/common/util.hpp", "#pragma once\n")
    make_file("libB/common/util.hpp", "#pragma once\n")
    make_file("thirdparty/engine/core.hpp", '#pragma once\n#include "detail/impl.hpp"\n')
    make_file("thirdparty/engine/detail/impl.hpp", "#pragma once\n")

    root = Path(temp_dir)
    return {
        "root": str(root),
        "src": str(root / "project" / "src"),
        "include": str(root / "project" / "include"),
        "libA": str(root / "libA"),
        "libB": str(root / "libB"),
        "thirdparty": str(root / "thirdparty"),
    }
