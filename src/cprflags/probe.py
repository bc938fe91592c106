"""Compiler vendor probing.

Runs a compiler's version query and maps its banner onto a vendor id
(``GNU``, ``NAG``, ``Intel``, ``XL``).  Probing never raises: a missing
compiler, a timeout, or an unknown banner all give ``""``, which the
toolchain layer treats as an unrecognized vendor.
"""

import re
import shlex
import subprocess

# Checked in order; the first match wins.
VERSION_ARGS: tuple[str, ...] = ("--version", "-V", "-qversion")

_BANNERS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"NAG Fortran Compiler", re.IGNORECASE), "NAG"),
    (re.compile(r"\b(?:ifort|ifx|icc|icx)\b|Intel\(R\)", re.IGNORECASE), "Intel"),
    (re.compile(r"IBM XL|\bxlf\b|\bxlc\b", re.IGNORECASE), "XL"),
    (re.compile(r"GNU Fortran|\bgcc\b|\(GCC\)|Free Software Foundation", re.IGNORECASE), "GNU"),
]


def vendor_from_banner(text: str) -> str:
    """Return the vendor id named in a ``--version`` banner, or ``""``."""
    for pattern, vendor_id in _BANNERS:
        if pattern.search(text):
            return vendor_id
    return ""


def probe_compiler_id(command: str, *, timeout: int = 10) -> str:
    """Run the compiler's version query and return the detected vendor id.

    ``--version`` is tried first, then ``-V`` (NAG) and ``-qversion`` (XL).
    """
    try:
        cmd_parts = shlex.split(command)
    except ValueError:
        cmd_parts = command.split()
    if not cmd_parts:
        return ""

    for version_arg in VERSION_ARGS:
        try:
            r = subprocess.run(
                cmd_parts + [version_arg],
                capture_output=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            return ""
        except (subprocess.TimeoutExpired, OSError):
            continue
        vendor_id = vendor_from_banner((r.stdout + r.stderr).decode("utf-8", errors="replace"))
        if vendor_id:
            return vendor_id
    return ""
