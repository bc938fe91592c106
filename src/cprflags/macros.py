"""Inclusion of the externally generated CESM Macros file.

When the build type name contains ``CESM`` (CESM and CESM_DEBUG), the file
``<binary_dir>/CESM_Macros.cmake`` is included.  Its contents belong to the
CESM build scripts; this module only triggers the inclusion.
"""

from collections.abc import Callable
from pathlib import Path

from cprflags.builder import ConfigurationBuilder

CESM_MACROS_FILENAME = "CESM_Macros.cmake"
CESM_PATTERN = "CESM"

Includer = Callable[[ConfigurationBuilder, Path], None]


def uses_cesm_macros(build_type: str) -> bool:
    """Return True if *build_type* selects the CESM Macros file (case-sensitive)."""
    return CESM_PATTERN in build_type


def cesm_macros_path(binary_dir: str | Path) -> Path:
    return Path(binary_dir) / CESM_MACROS_FILENAME


def record_include(builder: ConfigurationBuilder, path: Path) -> None:
    """Default includer: check the file exists and record it, unparsed."""
    if not path.is_file():
        raise FileNotFoundError(
            f"CESM Macros file not found: {path}. "
            "Generate it with the CESM configure scripts before selecting a CESM build type."
        )
    builder.record_include(path)


def include_external_macros(
    builder: ConfigurationBuilder,
    binary_dir: str | Path,
    includer: Includer = record_include,
) -> Path | None:
    """Include the CESM Macros file if the selected build type needs it.

    Returns:
        The included path, or ``None`` when the build type does not use it.
    """
    if not uses_cesm_macros(builder.build_type):
        return None
    path = cesm_macros_path(binary_dir)
    includer(builder, path)
    return path
