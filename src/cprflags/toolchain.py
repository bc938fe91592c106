"""Toolchain identity: operating system and compiler vendors.

The identity is fixed once at the start of a run.  Vendor ids are matched
exactly against :class:`Vendor`; anything else is "unrecognized", which is
not an error: it yields no compiler name, no vendor macro and no rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cprflags.builder import ConfigurationBuilder

# Prefix of the compiler macro, e.g. CPRGNU, CPRINTEL.
COMPILER_MACRO_PREFIX = "CPR"


class Vendor(str, Enum):
    """Recognized compiler vendors, valued by their compiler id."""

    NAG = "NAG"
    GNU = "GNU"
    XL = "XL"
    INTEL = "Intel"

    @classmethod
    def from_id(cls, compiler_id: str) -> Vendor | None:
        """Return the vendor for *compiler_id*, or ``None`` if unrecognized."""
        try:
            return cls(compiler_id)
        except ValueError:
            return None


# Names used in CESM Macros files and in the CPR<NAME> macro.
COMPILER_NAMES: dict[Vendor, str] = {
    Vendor.NAG: "nag",
    Vendor.GNU: "gnu",
    Vendor.XL: "ibm",
    Vendor.INTEL: "intel",
}


def compiler_name(compiler_id: str) -> str | None:
    """Map a vendor id onto its lowercase compiler name (``XL`` -> ``ibm``)."""
    vendor = Vendor.from_id(compiler_id)
    if vendor is None:
        return None
    return COMPILER_NAMES[vendor]


@dataclass(frozen=True)
class ToolchainIdentity:
    """Operating system plus Fortran and C compiler ids."""

    os_name: str
    fortran_id: str
    c_id: str = ""

    @property
    def fortran_vendor(self) -> Vendor | None:
        return Vendor.from_id(self.fortran_id)

    @property
    def c_vendor(self) -> Vendor | None:
        return Vendor.from_id(self.c_id)

    @property
    def compiler_name(self) -> str | None:
        """Compiler name derived from the Fortran vendor."""
        return compiler_name(self.fortran_id)

    @property
    def os_macro(self) -> str:
        return self.os_name.upper()

    @property
    def compiler_macro(self) -> str | None:
        name = self.compiler_name
        if name is None:
            return None
        return f"{COMPILER_MACRO_PREFIX}{name}".upper()

    @property
    def macros(self) -> tuple[str, ...]:
        """Always-on macros: the OS macro and, if recognized, the compiler macro.

        An empty OS name defines no OS macro.
        """
        return tuple(m for m in (self.os_macro, self.compiler_macro) if m)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "os": self.os_name,
            "fortran_id": self.fortran_id,
            "c_id": self.c_id,
            "compiler_name": self.compiler_name,
            "os_macro": self.os_macro,
            "compiler_macro": self.compiler_macro,
        }


def detect_toolchain(os_name: str, fortran_id: str, c_id: str = "") -> ToolchainIdentity:
    """Build the toolchain identity from raw OS and compiler id strings."""
    return ToolchainIdentity(os_name=os_name.strip(), fortran_id=fortran_id.strip(), c_id=c_id.strip())


def define_toolchain_macros(identity: ToolchainIdentity, builder: ConfigurationBuilder) -> None:
    """Define the OS macro and the compiler macro on *builder*.

    The compiler macro is skipped when the Fortran vendor is unrecognized.
    """
    builder.add_definitions(*(f"-D{macro}" for macro in identity.macros))
