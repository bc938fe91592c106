"""Vendor- and language-specific flag rules.

Each vendor maps to one rule function ``(language, builder) -> None`` that
appends flags to two kinds of target:

generic
    Always active.  Only flags that leave the generated code unchanged
    (warnings, diagnostics formatting, conformance checks) go here, so a
    plain build still resembles one made with the CESM flags.
HARSH
    Opt-in.  Runtime checks, floating-point and integer traps, NaN
    initialization and kind auto-promotion, to surface latent bugs in CI.

The resolver calls the Fortran vendor's rule with ``Language.FORTRAN`` and
the C vendor's rule with ``Language.C``.  Unrecognized vendors have no
rule.  After the vendor rules, both HARSH flag-sets receive ``-g``.
"""

from collections.abc import Callable

from cprflags.builder import ConfigurationBuilder
from cprflags.flags import Language, add_flags
from cprflags.profiles import HARSH
from cprflags.toolchain import ToolchainIdentity, Vendor

Rule = Callable[[Language, ConfigurationBuilder], None]

NAG_BYTE_KIND = "-kind=byte"

# Needed by pFUnit with the Intel compiler.
INTEL_PFUNIT_FLAGS: tuple[str, ...] = ("-assume", "realloc_lhs")

GNU_FORTRAN_HARSH_FLAGS: tuple[str, ...] = (
    "-fno-common",  # portability: no tentative definitions
    "-ftrapv",  # trap signed integer overflow
    "-ffpe-trap=invalid,zero,overflow",
    "-fcheck=all",
    "-finit-real=snan",  # reals start as signaling NaN
    "-fdefault-integer-8",  # auto-promotion, catches default-size assumptions
    "-fdefault-real-8",
)

HARSH_DEBUG_FLAG = "-g"


def _nag(language: Language, builder: ConfigurationBuilder) -> None:
    if language is not Language.FORTRAN:
        return
    generic = builder.generic[Language.FORTRAN]
    add_flags(generic, "-strict95")
    if builder.use_color:
        add_flags(generic, "-colour")

    # The CESM Macros file may already set kind=byte for this build type.
    if NAG_BYTE_KIND not in builder.selected_flags(Language.FORTRAN):
        add_flags(generic, NAG_BYTE_KIND)

    harsh = builder.profile(HARSH)[Language.FORTRAN]
    # -gline: line numbers in tracebacks, -C=all: NAG runtime checks,
    # -ieee=stop: trap FP exceptions.
    add_flags(harsh, "-gline", "-C=all", "-ieee=stop")
    # -nan: reals start as signaling NaN, -u: catch implicit typing.
    add_flags(harsh, "-nan", "-u")


def _gnu(language: Language, builder: ConfigurationBuilder) -> None:
    if language is Language.FORTRAN:
        # -Wuninitialized gives too many false positives.
        add_flags(builder.generic[Language.FORTRAN], "-Wall", "-Wextra", "-Wno-uninitialized")
        add_flags(builder.profile(HARSH)[Language.C], *GNU_FORTRAN_HARSH_FLAGS)
    else:
        add_flags(builder.generic[Language.C], "-Wall", "-Wextra", "-pedantic")
        add_flags(builder.profile(HARSH)[Language.C], "-fno-common", "-ftrapv")


def _xl(language: Language, builder: ConfigurationBuilder) -> None:
    # No extra flags for XL.
    return None


def _intel(language: Language, builder: ConfigurationBuilder) -> None:
    if language is not Language.FORTRAN:
        return
    add_flags(builder.generic[Language.FORTRAN], *INTEL_PFUNIT_FLAGS)
    add_flags(builder.profile(HARSH)[Language.FORTRAN], "-check", "all", "-traceback")


RULES: dict[Vendor, Rule] = {
    Vendor.NAG: _nag,
    Vendor.GNU: _gnu,
    Vendor.XL: _xl,
    Vendor.INTEL: _intel,
}


def rule_for(vendor: Vendor | None) -> Rule | None:
    """Return the rule for *vendor*, or ``None`` for unrecognized vendors."""
    if vendor is None:
        return None
    return RULES.get(vendor)


def apply_rules(identity: ToolchainIdentity, builder: ConfigurationBuilder) -> None:
    """Apply the Fortran and C vendor rules, then the HARSH debug flag."""
    for language, vendor in (
        (Language.FORTRAN, identity.fortran_vendor),
        (Language.C, identity.c_vendor),
    ):
        rule = rule_for(vendor)
        if rule is not None:
            rule(language, builder)

    harsh = builder.profile(HARSH)
    add_flags(harsh[Language.FORTRAN], HARSH_DEBUG_FLAG)
    add_flags(harsh[Language.C], HARSH_DEBUG_FLAG)
