"""Project configuration loader for cprflags.

Reads ``cprflags.toml`` from the project root and exposes every setting as
simple attributes, so the resolver and the CLI share one view of the
toolchain, the selected build type, and the user's profile overrides.

Example ``cprflags.toml``::

    [toolchain]
    system = "Linux"
    fortran = "GNU"            # compiler id; or probe one:
    # fortran_compiler = "gfortran"
    c = "GNU"

    [build]
    type = "HARSH"
    binary_dir = "build"
    source_dir = "."
    use_color = false

    [profiles.Debug]
    fortran = "-g -O0"
    c = "-g -O0"

    [tests]
    names = ["test_kinds", "test_shr_strconvert"]

Usage::

    from cprflags.config import load_config

    cfg = load_config()
    cfg.build_type        # "HARSH"
    cfg.binary_dir        # Path object
"""

from __future__ import annotations

import platform
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from cprflags.flags import Language

CONFIG_FILENAME = "cprflags.toml"


@dataclass
class ProjectConfig:
    """Parsed project configuration with computed paths."""

    # Root directory (where cprflags.toml lives)
    root: Path

    # --- [toolchain] ---
    system: str = field(default_factory=platform.system)
    fortran_id: str = ""
    c_id: str = ""
    fortran_compiler: str = ""  # probed when fortran_id is empty
    c_compiler: str = ""

    # --- [build] ---
    build_type: str = ""
    binary_dir: Path = field(default_factory=lambda: Path())
    source_dir: Path = field(default_factory=lambda: Path())
    use_color: bool = False
    fortran_flags: str = ""
    c_flags: str = ""

    # --- [profiles.<name>] ---
    profile_overrides: Dict[str, Dict[str, str]] = field(default_factory=dict)

    # --- [tests] ---
    test_names: List[str] = field(default_factory=list)

    @property
    def initial_flags(self) -> Dict[Language, str]:
        """Generic flags the user starts from, before any rule runs."""
        return {Language.FORTRAN: self.fortran_flags, Language.C: self.c_flags}


def _resolve(root: Path, rel: Optional[str]) -> Optional[Path]:
    """Resolve a path relative to project root."""
    if rel is None:
        return None
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _find_root(start: Optional[Path] = None) -> Path:
    """Walk up from *start* (or cwd) to find cprflags.toml."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_FILENAME} in any parent of the current directory. "
        f"Run cprflags from within a project that contains {CONFIG_FILENAME}."
    )


def _expect(table: dict, key: str, kind: type, section: str):
    value = table.get(key)
    if value is not None and not isinstance(value, kind):
        raise ValueError(
            f"[{section}] {key} must be a {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _parse_profiles(raw: dict) -> Dict[str, Dict[str, str]]:
    profiles = raw.get("profiles", {})
    if not isinstance(profiles, dict):
        raise ValueError("[profiles] must be a table of per-profile tables")
    overrides: Dict[str, Dict[str, str]] = {}
    for name, table in profiles.items():
        if not isinstance(table, dict):
            raise ValueError(f"[profiles.{name}] must be a table")
        section = f"profiles.{name}"
        overrides[name] = {
            "fortran": _expect(table, "fortran", str, section) or "",
            "c": _expect(table, "c", str, section) or "",
        }
    return overrides


def load_config(root: Optional[Path] = None) -> ProjectConfig:
    """Load cprflags.toml.

    Args:
        root: Project root directory.  Auto-detected if ``None``.

    Raises:
        FileNotFoundError: no cprflags.toml was found.
        ValueError: a setting has the wrong type.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    toolchain = raw.get("toolchain", {})
    build = raw.get("build", {})
    tests = raw.get("tests", {})

    cfg = ProjectConfig(
        root=root,
        # toolchain
        fortran_id=_expect(toolchain, "fortran", str, "toolchain") or "",
        c_id=_expect(toolchain, "c", str, "toolchain") or "",
        fortran_compiler=_expect(toolchain, "fortran_compiler", str, "toolchain") or "",
        c_compiler=_expect(toolchain, "c_compiler", str, "toolchain") or "",
        # build
        build_type=_expect(build, "type", str, "build") or "",
        binary_dir=_resolve(root, _expect(build, "binary_dir", str, "build") or "build"),
        source_dir=_resolve(root, _expect(build, "source_dir", str, "build") or "."),
        use_color=bool(_expect(build, "use_color", bool, "build")),
        fortran_flags=_expect(build, "fortran_flags", str, "build") or "",
        c_flags=_expect(build, "c_flags", str, "build") or "",
        # profiles / tests
        profile_overrides=_parse_profiles(raw),
        test_names=list(_expect(tests, "names", list, "tests") or []),
    )

    system = _expect(toolchain, "system", str, "toolchain")
    if system:
        cfg.system = system

    return cfg
