"""Named build profiles.

Each profile holds an independent Fortran and C flag string.  The five
standard profiles can be seeded from ``[profiles.<name>]`` in
``cprflags.toml``; HARSH, CESM and CESM_DEBUG are reset to empty on every
run and only receive flags from the rule table or the CESM macro file.

Profile names are case-insensitive (``Harsh`` and ``HARSH`` are the same
profile).  Names outside :data:`BUILD_TYPES` only match a profile
seeded under the same name (again ignoring case).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from cprflags.flags import FlagSet, Language

STANDARD_BUILD_TYPES: tuple[str, ...] = (
    "None",
    "Debug",
    "Release",
    "RelWithDebInfo",
    "MinSizeRel",
)

# Always reset to "" at the start of a run.
FORCED_BUILD_TYPES: tuple[str, ...] = ("HARSH", "CESM", "CESM_DEBUG")

BUILD_TYPES: tuple[str, ...] = STANDARD_BUILD_TYPES + FORCED_BUILD_TYPES

HARSH = "HARSH"

_BY_UPPER = {name.upper(): name for name in BUILD_TYPES}


def canonical_build_type(name: str) -> str:
    """Map *name* onto its canonical profile spelling.

    Unknown names are returned unchanged.
    """
    return _BY_UPPER.get(name.upper(), name)


def find_profile_name(name: str, names: Iterable[str]) -> str:
    """Return the spelling under which *name* is stored among *names*.

    Matching ignores case for every profile, including custom ones seeded
    from ``cprflags.toml``.  An unmatched name comes back in its canonical
    spelling.
    """
    canonical = canonical_build_type(name)
    upper = canonical.upper()
    for existing in names:
        if existing.upper() == upper:
            return existing
    return canonical


class Profile:
    """Mutable Fortran/C flag-sets for one build profile."""

    def __init__(self, name: str, fortran: str = "", c: str = "") -> None:
        self.name = name
        self.flags: dict[Language, FlagSet] = {
            Language.FORTRAN: FlagSet(fortran),
            Language.C: FlagSet(c),
        }

    def __getitem__(self, language: Language) -> FlagSet:
        return self.flags[language]

    def freeze(self) -> "ProfileFlags":
        return ProfileFlags(
            name=self.name,
            fortran=self.flags[Language.FORTRAN].value,
            c=self.flags[Language.C].value,
        )


@dataclass(frozen=True)
class ProfileFlags:
    """Read-only flags of a profile after resolution."""

    name: str
    fortran: str
    c: str

    def for_language(self, language: Language) -> str:
        return self.fortran if language is Language.FORTRAN else self.c

    def to_dict(self) -> dict[str, str]:
        return {"Fortran": self.fortran, "C": self.c}
