"""Single-pass flag resolution.

Order of a run:

1. Fix the toolchain identity and define the OS and compiler macros.
2. Reset the forced profiles and seed the standard ones from the config.
3. Include the CESM Macros file for CESM build types.
4. Apply the vendor rule table, then the HARSH ``-g``.
5. Freeze the builder into a :class:`ResolvedConfiguration`.

The CESM file is included before the rules run so that flags it sets are
seen by the NAG ``-kind=byte`` check.
"""

from pathlib import Path
from typing import Mapping

from cprflags.builder import ConfigurationBuilder, ResolvedConfiguration
from cprflags.config import ProjectConfig
from cprflags.flags import Language
from cprflags.macros import Includer, include_external_macros, record_include
from cprflags.probe import probe_compiler_id
from cprflags.rules import apply_rules
from cprflags.stopcodes import TestRegistry, define_stop_failure
from cprflags.toolchain import ToolchainIdentity, define_toolchain_macros, detect_toolchain


def resolve(
    identity: ToolchainIdentity,
    build_type: str = "",
    *,
    binary_dir: str | Path = ".",
    source_dir: str | Path = ".",
    use_color: bool = False,
    overrides: Mapping[str, Mapping[str, str]] | None = None,
    initial_flags: Mapping[Language, str] | None = None,
    includer: Includer = record_include,
) -> ResolvedConfiguration:
    """Resolve compiler flags and macros for one configuration run."""
    builder = ConfigurationBuilder(
        identity,
        build_type,
        use_color=use_color,
        current_directory=source_dir,
        overrides=overrides,
        initial_flags=initial_flags,
    )
    define_toolchain_macros(identity, builder)
    include_external_macros(builder, binary_dir, includer)
    apply_rules(identity, builder)
    return builder.freeze()


def identity_from_config(
    cfg: ProjectConfig,
    *,
    os_name: str | None = None,
    fortran_id: str | None = None,
    c_id: str | None = None,
) -> ToolchainIdentity:
    """Build the identity from explicit values, the config, or compiler probes.

    An id given as an argument wins over the config; a config id wins over
    probing ``fortran_compiler`` / ``c_compiler``.
    """
    if fortran_id is None:
        fortran_id = cfg.fortran_id
        if not fortran_id and cfg.fortran_compiler:
            fortran_id = probe_compiler_id(cfg.fortran_compiler)
    if c_id is None:
        c_id = cfg.c_id
        if not c_id and cfg.c_compiler:
            c_id = probe_compiler_id(cfg.c_compiler)
    return detect_toolchain(os_name if os_name is not None else cfg.system, fortran_id, c_id)


def resolve_project(
    cfg: ProjectConfig,
    *,
    identity: ToolchainIdentity | None = None,
    build_type: str | None = None,
    use_color: bool | None = None,
    includer: Includer = record_include,
) -> ResolvedConfiguration:
    """Run :func:`resolve` with settings from *cfg*; keyword arguments override it."""
    return resolve(
        identity if identity is not None else identity_from_config(cfg),
        build_type if build_type is not None else cfg.build_type,
        binary_dir=cfg.binary_dir,
        source_dir=cfg.source_dir,
        use_color=cfg.use_color if use_color is None else use_color,
        overrides=cfg.profile_overrides,
        initial_flags=cfg.initial_flags,
        includer=includer,
    )


def register_stop_failures(
    identity: ToolchainIdentity,
    test_names: list[str],
    registry: TestRegistry | None = None,
) -> TestRegistry:
    """Install the Fortran vendor's stop-failure rule on each named test."""
    registry = registry if registry is not None else TestRegistry()
    rule = define_stop_failure(identity.fortran_vendor)
    for name in test_names:
        rule.install(registry, name)
    return registry
