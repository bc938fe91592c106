"""Shared CLI utilities for cprflags commands.

Provides common Typer options, config-loading helpers, and standardised
output / error helpers so that every command gets the same toolchain
overrides, error reporting, and JSON output without boilerplate.

Usage in a command module::

    import typer
    from cprflags.cli import BuildTypeOption, get_config, error_exit, json_print

    app = typer.Typer()

    @app.callback(invoke_without_command=True)
    def main(build_type: str | None = BuildTypeOption) -> None:
        cfg = get_config()
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from cprflags.config import ProjectConfig, load_config

# Re-usable Typer options for toolchain / build-type overrides
BuildTypeOption: str | None = typer.Option(
    None,
    "--build-type",
    "-b",
    help="Build type (None, Debug, Release, RelWithDebInfo, MinSizeRel, HARSH, CESM, CESM_DEBUG).",
)
SystemOption: str | None = typer.Option(
    None, "--system", help="Operating system name (default: toolchain.system from the config, or this host)."
)
FortranIdOption: str | None = typer.Option(
    None, "--fortran-id", "-F", help="Fortran compiler id: NAG, GNU, XL, Intel."
)
CIdOption: str | None = typer.Option(None, "--c-id", "-C", help="C compiler id: NAG, GNU, XL, Intel.")
JsonOption: bool = typer.Option(False, "--json", help="Output results as JSON")


def get_config(root: Path | None = None, *, json_mode: bool = False) -> ProjectConfig:
    """Load cprflags.toml, or fall back to defaults rooted at the cwd.

    A missing file is not an error: every setting can come from options.
    A malformed file exits with an error.
    """
    try:
        return load_config(root)
    except FileNotFoundError:
        base = (root or Path.cwd()).resolve()
        return ProjectConfig(root=base, binary_dir=base / "build", source_dir=base)
    except ValueError as exc:
        error_exit(str(exc), json_mode=json_mode)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))
