"""Configuration-scoped preprocessor definitions.

Definitions are attached to a ``(directory, configuration)`` scope, the
equivalent of a directory's ``COMPILE_DEFINITIONS_<CONFIG>`` property.
Configuration names are stored upper-cased.  Lists are append-only.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cprflags.builder import ConfigurationBuilder

DefinitionScope = tuple[Path, str]


def strip_define_prefix(token: str) -> str:
    """Return the macro name for *token*, removing at most one leading ``-D``."""
    if token.startswith("-D"):
        return token[2:]
    return token


def scope_key(directory: str | Path, configuration: str) -> DefinitionScope:
    """Normalise a ``(directory, configuration)`` pair into a dict key."""
    return Path(directory), configuration.upper()


class DefinitionSet:
    """Append-only list of macro tokens for one scope."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def append(self, macro: str) -> None:
        self._items.append(macro)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._items)


def add_config_definitions(
    builder: ConfigurationBuilder,
    configuration: str,
    *tokens: str,
    directory: str | Path | None = None,
) -> None:
    """Add preprocessor definitions for *configuration* in the current directory.

    Each token may be given as ``-DFOO`` or ``FOO``; both add ``FOO``.
    Repeated calls accumulate, nothing is deduplicated.
    """
    key = scope_key(directory if directory is not None else builder.current_directory, configuration)
    defs = builder.config_definitions.setdefault(key, DefinitionSet())
    for token in tokens:
        defs.append(strip_define_prefix(token))
