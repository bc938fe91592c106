"""Compiler flag-set primitive.

FlagSet: an ordered, space-joined sequence of compiler flag tokens.

Flag-sets are append-only.  Duplicate tokens are legal and order is kept
because later tokens may override earlier ones at the compiler's
discretion (``-O2 ... -O0``, ``-D`` redefinitions).  Every profile is built
through :func:`add_flags`; nothing else writes to a flag-set.
"""

from enum import Enum


class Language(str, Enum):
    """Source languages with their own flag-sets."""

    FORTRAN = "Fortran"
    C = "C"

    def __str__(self) -> str:
        return self.value


class FlagSet:
    """An append-only, space-joined string of compiler flags."""

    __slots__ = ("_value",)

    def __init__(self, value: str = "") -> None:
        self._value = value.strip()

    @property
    def value(self) -> str:
        """The current flag string."""
        return self._value

    @property
    def tokens(self) -> tuple[str, ...]:
        """The current flag string split on whitespace."""
        return tuple(self._value.split())

    def append(self, *tokens: str) -> None:
        joined = " ".join(tokens)
        if not joined:
            return
        self._value = f"{self._value} {joined}" if self._value else joined

    def __contains__(self, flag: object) -> bool:
        # Plain substring test, same as the regex match on the flag string.
        return isinstance(flag, str) and flag in self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"FlagSet({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FlagSet):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


def add_flags(flag_set: FlagSet, *tokens: str) -> None:
    """Append *tokens* to *flag_set*, space-joined, in call order.

    No uniqueness is enforced: ``add_flags(x, "-a")`` twice leaves two
    ``-a`` tokens.
    """
    flag_set.append(*tokens)
