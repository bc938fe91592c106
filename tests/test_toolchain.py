"""Tests for toolchain identity detection and the always-on macros."""

import pytest

from cprflags.builder import ConfigurationBuilder
from cprflags.toolchain import (
    Vendor,
    compiler_name,
    define_toolchain_macros,
    detect_toolchain,
)

# ---------------------------------------------------------------------------
# compiler_name()
# ---------------------------------------------------------------------------


class TestCompilerName:
    @pytest.mark.parametrize(
        "compiler_id, expected",
        [("NAG", "nag"), ("GNU", "gnu"), ("XL", "ibm"), ("Intel", "intel")],
    )
    def test_known_vendors(self, compiler_id: str, expected: str) -> None:
        assert compiler_name(compiler_id) == expected

    @pytest.mark.parametrize("compiler_id", ["", "Clang", "PGI", "gnu", "INTEL", "Cray"])
    def test_unrecognized_yields_none(self, compiler_id: str) -> None:
        assert compiler_name(compiler_id) is None


class TestVendor:
    def test_from_id(self) -> None:
        assert Vendor.from_id("Intel") is Vendor.INTEL
        assert Vendor.from_id("XL") is Vendor.XL

    def test_from_id_unknown(self) -> None:
        assert Vendor.from_id("Flang") is None


# ---------------------------------------------------------------------------
# ToolchainIdentity
# ---------------------------------------------------------------------------


class TestIdentity:
    def test_os_macro_uppercased(self) -> None:
        assert detect_toolchain("Darwin", "GNU").os_macro == "DARWIN"

    def test_compiler_macro(self) -> None:
        assert detect_toolchain("Linux", "XL").compiler_macro == "CPRIBM"
        assert detect_toolchain("Linux", "Intel").compiler_macro == "CPRINTEL"

    def test_macros_known_vendor(self) -> None:
        assert detect_toolchain("Linux", "NAG").macros == ("LINUX", "CPRNAG")

    def test_macros_unknown_vendor(self) -> None:
        ident = detect_toolchain("Linux", "PGI")
        assert ident.compiler_macro is None
        assert ident.macros == ("LINUX",)

    def test_vendors_split_by_language(self) -> None:
        ident = detect_toolchain("Linux", "NAG", "GNU")
        assert ident.fortran_vendor is Vendor.NAG
        assert ident.c_vendor is Vendor.GNU

    def test_frozen(self) -> None:
        ident = detect_toolchain("Linux", "GNU")
        with pytest.raises(AttributeError):
            ident.os_name = "AIX"  # type: ignore[misc]

    def test_whitespace_trimmed(self) -> None:
        ident = detect_toolchain(" Linux ", "GNU\n", " GNU")
        assert ident.fortran_vendor is Vendor.GNU
        assert ident.os_macro == "LINUX"


# ---------------------------------------------------------------------------
# define_toolchain_macros()
# ---------------------------------------------------------------------------


class TestDefineToolchainMacros:
    def test_defines_both(self) -> None:
        ident = detect_toolchain("Linux", "GNU")
        b = ConfigurationBuilder(ident)
        define_toolchain_macros(ident, b)
        assert b.definitions == ["LINUX", "CPRGNU"]

    def test_unrecognized_skips_compiler_macro(self) -> None:
        ident = detect_toolchain("AIX", "Unknown")
        b = ConfigurationBuilder(ident)
        define_toolchain_macros(ident, b)
        assert b.definitions == ["AIX"]
        assert not any(d.startswith("CPR") for d in b.definitions)

    def test_empty_os_defines_no_os_macro(self) -> None:
        ident = detect_toolchain("  ", "GNU")
        b = ConfigurationBuilder(ident)
        define_toolchain_macros(ident, b)
        assert b.definitions == ["CPRGNU"]
        assert "-D" not in b.freeze().definition_flags
