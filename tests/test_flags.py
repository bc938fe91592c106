"""Tests for the flag-set primitive."""

from cprflags.flags import FlagSet, Language, add_flags

# ---------------------------------------------------------------------------
# add_flags()
# ---------------------------------------------------------------------------


class TestAddFlags:
    def test_appends_in_call_order(self) -> None:
        fs = FlagSet("-O2")
        add_flags(fs, "-a")
        add_flags(fs, "-b")
        assert fs.value == "-O2 -a -b"

    def test_no_deduplication(self) -> None:
        fs = FlagSet("-O2")
        add_flags(fs, "-a")
        add_flags(fs, "-b")
        add_flags(fs, "-a")
        assert fs.value == "-O2 -a -b -a"
        assert fs.tokens.count("-a") == 2

    def test_multiple_tokens_space_joined(self) -> None:
        fs = FlagSet()
        add_flags(fs, "-check", "all", "-traceback")
        assert fs.value == "-check all -traceback"

    def test_empty_start_has_no_leading_space(self) -> None:
        fs = FlagSet()
        add_flags(fs, "-g")
        assert fs.value == "-g"

    def test_no_tokens_is_noop(self) -> None:
        fs = FlagSet("-O2")
        add_flags(fs)
        assert fs.value == "-O2"


# ---------------------------------------------------------------------------
# FlagSet
# ---------------------------------------------------------------------------


class TestFlagSet:
    def test_contains_is_substring(self) -> None:
        fs = FlagSet("-O0 -kind=byte -g")
        assert "-kind=byte" in fs
        assert "kind" in fs
        assert "-kind=unique" not in fs

    def test_contains_non_string(self) -> None:
        assert 3 not in FlagSet("-O3")

    def test_tokens(self) -> None:
        assert FlagSet("-a  -b -c").tokens == ("-a", "-b", "-c")

    def test_equality_with_str(self) -> None:
        assert FlagSet("-g") == "-g"
        assert FlagSet("-g") == FlagSet("-g")
        assert FlagSet("-g") != FlagSet("-O2")

    def test_initial_value_stripped(self) -> None:
        assert FlagSet("  -g ").value == "-g"

    def test_str(self) -> None:
        assert str(FlagSet("-Wall")) == "-Wall"


class TestLanguage:
    def test_values(self) -> None:
        assert str(Language.FORTRAN) == "Fortran"
        assert str(Language.C) == "C"
