"""Tests for CESM Macros file inclusion."""

from pathlib import Path

import pytest

from cprflags.builder import ConfigurationBuilder
from cprflags.macros import (
    CESM_MACROS_FILENAME,
    cesm_macros_path,
    include_external_macros,
    uses_cesm_macros,
)
from cprflags.toolchain import detect_toolchain


def _builder(build_type: str) -> ConfigurationBuilder:
    return ConfigurationBuilder(detect_toolchain("Linux", "GNU"), build_type)


class TestUsesCesmMacros:
    @pytest.mark.parametrize("name", ["CESM", "CESM_DEBUG", "MY_CESM_BUILD"])
    def test_matches(self, name: str) -> None:
        assert uses_cesm_macros(name)

    @pytest.mark.parametrize("name", ["Debug", "HARSH", "", "cesm"])
    def test_no_match(self, name: str) -> None:
        assert not uses_cesm_macros(name)


class TestIncludeExternalMacros:
    def test_path(self, tmp_path: Path) -> None:
        assert cesm_macros_path(tmp_path) == tmp_path / CESM_MACROS_FILENAME

    @pytest.mark.parametrize("build_type", ["Cesm", "Cesm_Debug", "CESM", "cesm_debug"])
    def test_cesm_types_include(self, tmp_path: Path, build_type: str) -> None:
        (tmp_path / CESM_MACROS_FILENAME).write_text("set(CMAKE_Fortran_FLAGS_CESM \"-O2\")\n")
        b = _builder(build_type)
        path = include_external_macros(b, tmp_path)
        assert path == tmp_path / CESM_MACROS_FILENAME
        assert b.included_files == [path]

    def test_debug_does_not_include(self, tmp_path: Path) -> None:
        (tmp_path / CESM_MACROS_FILENAME).write_text("")
        b = _builder("Debug")
        assert include_external_macros(b, tmp_path) is None
        assert b.included_files == []

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        b = _builder("CESM")
        with pytest.raises(FileNotFoundError, match="CESM_Macros.cmake"):
            include_external_macros(b, tmp_path)

    def test_custom_includer(self, tmp_path: Path) -> None:
        seen: list[Path] = []

        def includer(builder: ConfigurationBuilder, path: Path) -> None:
            seen.append(path)

        b = _builder("CESM_DEBUG")
        include_external_macros(b, tmp_path, includer)
        assert seen == [tmp_path / CESM_MACROS_FILENAME]

    def test_contents_not_parsed(self, tmp_path: Path) -> None:
        (tmp_path / CESM_MACROS_FILENAME).write_text("this is not ( valid anything")
        b = _builder("CESM")
        include_external_macros(b, tmp_path)
        assert b.profile("CESM").freeze().fortran == ""
