"""Tests for cprflags cfg (programmatic config editor)."""

from pathlib import Path

import pytest
import tomlkit
from click.exceptions import Exit as ClickExit
from typer.testing import CliRunner

from cprflags.cfg import _coerce, _load_toml, _save_toml
from cprflags.cfg import app as cfg_app
from cprflags.config import load_config

SAMPLE_TOML = """\
# Project config
[toolchain]
system = "Linux"
fortran = "NAG"
c = "GNU"

# Build selection
[build]
type = "Debug"
binary_dir = "build"
"""

runner = CliRunner()


def _make_project(tmp_path: Path, toml_content: str = SAMPLE_TOML) -> Path:
    (tmp_path / "cprflags.toml").write_text(toml_content, encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestLoadSave:
    def test_round_trip_preserves_comments(self, tmp_path: Path) -> None:
        root = _make_project(tmp_path)
        doc, path = _load_toml(root)
        _save_toml(doc, path)
        result = path.read_text(encoding="utf-8")
        assert "# Project config" in result
        assert "# Build selection" in result

    def test_load_nonexistent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ClickExit):
            _load_toml(tmp_path)


class TestCoerce:
    def test_bool(self) -> None:
        assert _coerce("true") is True
        assert _coerce("False") is False

    def test_int(self) -> None:
        assert _coerce("42") == 42

    def test_float(self) -> None:
        assert _coerce("1.5") == 1.5

    def test_flags_stay_strings(self) -> None:
        assert _coerce("-O2 -g") == "-O2 -g"


# ---------------------------------------------------------------------------
# CLI-level tests (end-to-end via CliRunner)
# ---------------------------------------------------------------------------


class TestCLIInit:
    def test_creates_loadable_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["init", "-F", "Intel", "-C", "GNU", "-b", "harsh"])
        assert result.exit_code == 0
        cfg = load_config(tmp_path)
        assert cfg.fortran_id == "Intel"
        assert cfg.c_id == "GNU"
        assert cfg.build_type == "HARSH"

    def test_refuses_overwrite(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["init"])
        assert result.exit_code == 1
        assert "# Project config" in (tmp_path / "cprflags.toml").read_text()


class TestCLIShow:
    def test_show_all(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["show"])
        assert result.exit_code == 0
        assert "NAG" in result.output

    def test_show_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["show", "build.type"])
        assert result.exit_code == 0
        assert result.output.strip() == "Debug"

    def test_show_missing_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["show", "nonexistent.key"])
        assert result.exit_code == 1


class TestCLISet:
    def test_set_preserves_comments(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["set", "build.use_color", "true"])
        assert result.exit_code == 0
        text = (tmp_path / "cprflags.toml").read_text()
        assert "# Build selection" in text
        assert load_config(tmp_path).use_color is True

    def test_set_new_table(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["set", "build.fortran_flags", "-fopenmp"])
        assert result.exit_code == 0
        doc = tomlkit.parse((tmp_path / "cprflags.toml").read_text())
        assert doc["build"]["fortran_flags"] == "-fopenmp"

    def test_set_through_scalar_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["set", "build.type.x", "1"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)
        assert (tmp_path / "cprflags.toml").read_text() == SAMPLE_TOML


class TestCLISetProfile:
    def test_standard_profile(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["set-profile", "debug", "--fortran", "-g -O0"])
        assert result.exit_code == 0
        cfg = load_config(tmp_path)
        assert cfg.profile_overrides["Debug"] == {"fortran": "-g -O0", "c": ""}

    def test_forced_profile_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["set-profile", "Harsh", "--c", "-O3"])
        assert result.exit_code == 1
        assert "profiles" not in (tmp_path / "cprflags.toml").read_text()


class TestCLIPath:
    def test_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cfg_app, ["path"])
        assert result.exit_code == 0
        assert result.output.strip().endswith("cprflags.toml")
