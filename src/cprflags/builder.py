"""Configuration builder and the resolved snapshot.

All state written during a run (generic flags, profile flags, definitions,
included files) lives on a :class:`ConfigurationBuilder` that is passed
explicitly through the resolution steps.  :meth:`ConfigurationBuilder.freeze`
produces a :class:`ResolvedConfiguration`, which is what the compilation
driver consumes.

Usage::

    builder = ConfigurationBuilder(identity, build_type="Harsh")
    add_flags(builder.generic[Language.C], "-Wall")
    add_flags(builder.profile("HARSH")[Language.C], "-g")
    resolved = builder.freeze()
    resolved.flags(Language.C)   # "-Wall -g"
"""

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from cprflags.definitions import DefinitionScope, DefinitionSet, scope_key, strip_define_prefix
from cprflags.flags import FlagSet, Language
from cprflags.profiles import (
    BUILD_TYPES,
    FORCED_BUILD_TYPES,
    Profile,
    ProfileFlags,
    find_profile_name,
)
from cprflags.toolchain import ToolchainIdentity


class ConfigurationBuilder:
    """Mutable accumulator for one configuration run."""

    def __init__(
        self,
        identity: ToolchainIdentity,
        build_type: str = "",
        *,
        use_color: bool = False,
        current_directory: str | Path = ".",
        overrides: Mapping[str, Mapping[str, str]] | None = None,
        initial_flags: Mapping[Language, str] | None = None,
    ) -> None:
        self.identity = identity
        self.use_color = use_color
        self.current_directory = Path(current_directory)

        initial_flags = initial_flags or {}
        self.generic: dict[Language, FlagSet] = {
            lang: FlagSet(initial_flags.get(lang, "")) for lang in Language
        }
        self.profiles: dict[str, Profile] = {name: Profile(name) for name in BUILD_TYPES}
        self.definitions: list[str] = []
        self.config_definitions: dict[DefinitionScope, DefinitionSet] = {}
        self.included_files: list[Path] = []

        for name, values in (overrides or {}).items():
            self.seed_profile(name, fortran=values.get("fortran", ""), c=values.get("c", ""))

        self.build_type = find_profile_name(build_type, self.profiles) if build_type else ""
        if self.build_type and self.build_type not in self.profiles:
            warnings.warn(
                f"Build type {self.build_type!r} matches no profile; only generic flags apply.",
                stacklevel=2,
            )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def seed_profile(self, name: str, *, fortran: str = "", c: str = "") -> None:
        """Set the starting flags of a standard or custom profile.

        Forced profiles (HARSH, CESM, CESM_DEBUG) always start empty, so a
        seed for one of them is ignored with a warning.
        """
        canonical = find_profile_name(name, self.profiles)
        if canonical in FORCED_BUILD_TYPES:
            warnings.warn(
                f"Profile {canonical} is reset on every run; override ignored.",
                stacklevel=2,
            )
            return
        self.profiles[canonical] = Profile(canonical, fortran=fortran, c=c)

    def profile(self, name: str) -> Profile:
        """Return the profile called *name*, creating an empty one if unknown."""
        canonical = find_profile_name(name, self.profiles)
        if canonical not in self.profiles:
            self.profiles[canonical] = Profile(canonical)
        return self.profiles[canonical]

    def selected_flags(self, language: Language) -> FlagSet:
        """Flag-set of the selected build type (empty if none is selected)."""
        profile = self.profiles.get(self.build_type)
        return profile[language] if profile is not None else FlagSet()

    # ------------------------------------------------------------------
    # Definitions and includes
    # ------------------------------------------------------------------

    def add_definitions(self, *tokens: str) -> None:
        """Add directory-wide, always-on macros (``-DFOO`` or ``FOO``)."""
        self.definitions.extend(strip_define_prefix(t) for t in tokens)

    def scoped_definitions(self, configuration: str, directory: str | Path | None = None) -> tuple[str, ...]:
        key = scope_key(directory if directory is not None else self.current_directory, configuration)
        defs = self.config_definitions.get(key)
        return defs.as_tuple() if defs is not None else ()

    def record_include(self, path: Path) -> None:
        self.included_files.append(path)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def freeze(self) -> "ResolvedConfiguration":
        return ResolvedConfiguration(
            identity=self.identity,
            build_type=self.build_type,
            generic=MappingProxyType({lang: fs.value for lang, fs in self.generic.items()}),
            profiles=MappingProxyType({name: p.freeze() for name, p in self.profiles.items()}),
            definitions=tuple(self.definitions),
            config_definitions=MappingProxyType(
                {key: defs.as_tuple() for key, defs in self.config_definitions.items()}
            ),
            included_files=tuple(self.included_files),
        )


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Read-only result of a configuration run."""

    identity: ToolchainIdentity
    build_type: str
    generic: Mapping[Language, str]
    profiles: Mapping[str, ProfileFlags]
    definitions: tuple[str, ...] = ()
    config_definitions: Mapping[DefinitionScope, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    included_files: tuple[Path, ...] = ()

    def profile_flags(self, language: Language, build_type: str | None = None) -> str:
        name = find_profile_name(self.build_type if build_type is None else build_type, self.profiles)
        profile = self.profiles.get(name)
        return profile.for_language(language) if profile is not None else ""

    def flags(self, language: Language, build_type: str | None = None) -> str:
        """Generic flags followed by the flags of *build_type* (default: selected)."""
        parts = [self.generic[language], self.profile_flags(language, build_type)]
        return " ".join(p for p in parts if p)

    @property
    def definition_flags(self) -> tuple[str, ...]:
        return tuple(f"-D{d}" for d in self.definitions)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            "toolchain": self.identity.to_dict(),
            "build_type": self.build_type,
            "flags": {str(lang): self.flags(lang) for lang in Language},
            "generic": {str(lang): value for lang, value in self.generic.items()},
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
            "definitions": list(self.definitions),
            "config_definitions": [
                {"directory": str(directory), "configuration": config, "definitions": list(defs)}
                for (directory, config), defs in self.config_definitions.items()
            ],
            "included_files": [str(p) for p in self.included_files],
        }
