"""main.py – Umbrella CLI entry point for cprflags.

Imports and registers all subcommand typer apps from a small table.

Single-command modules are registered as flat ``app.command()`` entries;
only true multi-command modules (currently only ``cfg``) use
``add_typer()``.
"""

import importlib

import typer

app = typer.Typer(
    help="Compiler flag and macro resolver for Fortran/C build configurations.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  cprflags cfg init -F GNU -C GNU     Create cprflags.toml
  cprflags detect                     Check the detected toolchain and macros
  cprflags resolve -b HARSH           Flags for a build type
  cprflags resolve --json -o f.json   Snapshot for the compilation driver
  cprflags check-stop t out.txt -r 0  Classify a test run's STOP code

[dim]All subcommands read settings from cprflags.toml when present.
Run 'cprflags <cmd> --help' for details.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

# Single-command modules – registered as flat commands via app.command().
_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("resolve", "cprflags.resolve_cli", "Resolve compiler flags and macros for a build type."),
    ("detect", "cprflags.detect_cli", "Show the detected toolchain identity and macros."),
    ("check-stop", "cprflags.stop_cli", "Classify a test run's STOP code as pass or fail."),
]

# Multi-command modules – registered as groups via app.add_typer().
_MULTI_COMMANDS: list[tuple[str, str, str]] = [
    ("cfg", "cprflags.cfg", "Read and edit cprflags.toml programmatically."),
]

# Register single-command modules as flat commands.
for _name, _module, _help in _SINGLE_COMMANDS:
    _mod = importlib.import_module(_module)
    _epilog = getattr(_mod.app.info, "epilog", None)
    if not isinstance(_epilog, str):
        _epilog = getattr(_mod, "_EPILOG", None)
    app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)

# Register multi-command modules as groups (Typer sub-apps).
for _name, _module, _help in _MULTI_COMMANDS:
    app.add_typer(importlib.import_module(_module).app, name=_name, help=_help)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
