"""resolve_cli.py – Resolve compiler flags for one configuration run.

Runs the full pipeline (toolchain macros, CESM Macros inclusion, vendor
rules, HARSH debug flags) and prints the resulting flags either as a Rich
summary or as JSON for a compilation driver.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cprflags.builder import ResolvedConfiguration
from cprflags.cli import (
    BuildTypeOption,
    CIdOption,
    FortranIdOption,
    JsonOption,
    SystemOption,
    error_exit,
    get_config,
    json_print,
)
from cprflags.flags import Language
from cprflags.resolver import identity_from_config, register_stop_failures, resolve_project
from cprflags.stopcodes import FAIL_REGULAR_EXPRESSION
from cprflags.utils import atomic_write_json

# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


def _render_flags(console: Console, resolved: ResolvedConfiguration, all_profiles: bool) -> None:
    """Print the final flags and, optionally, every profile's flags."""
    build_type = resolved.build_type or "(none)"
    title = Text(f"  {build_type}  ", style="bold white on blue")

    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Language", style="dim")
    tbl.add_column("Generic")
    tbl.add_column("Profile")
    tbl.add_column("Final", style="bold")
    for lang in Language:
        tbl.add_row(
            str(lang),
            escape(resolved.generic[lang]) or "—",
            escape(resolved.profile_flags(lang)) or "—",
            escape(resolved.flags(lang)) or "—",
        )

    ident = resolved.identity
    subtitle_parts = [
        f"OS [bold]{escape(ident.os_name)}[/]",
        f"Fortran [bold]{escape(ident.fortran_id or '?')}[/]",
        f"C [bold]{escape(ident.c_id or '?')}[/]",
    ]
    console.print(Panel(tbl, title=title, subtitle="  ·  ".join(subtitle_parts), border_style="blue"))

    if all_profiles:
        ptbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        ptbl.add_column("Profile")
        ptbl.add_column("Fortran")
        ptbl.add_column("C")
        for name, profile in resolved.profiles.items():
            marker = "→ " if name == resolved.build_type else "  "
            ptbl.add_row(f"{marker}{name}", escape(profile.fortran) or "—", escape(profile.c) or "—")
        console.print(Panel(ptbl, title="[bold]Profiles[/]", border_style="green"))


def _render_definitions(console: Console, resolved: ResolvedConfiguration) -> None:
    macros = " ".join(resolved.definition_flags) or "—"
    console.print(f"[bold]Definitions:[/] {escape(macros)}")
    for (directory, config), defs in resolved.config_definitions.items():
        console.print(f"  [dim]{escape(str(directory))} ({config}):[/] {escape(' '.join(defs))}")
    for path in resolved.included_files:
        console.print(f"[bold]Included:[/] {escape(str(path))}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Resolve compiler flags and macros for the selected build type.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

cprflags resolve                               Flags for the configured build type

cprflags resolve -b HARSH -F GNU -C GNU        Override build type and compilers

cprflags resolve --all-profiles                Show every profile's flags

cprflags resolve --json -o build/flags.json    Write a snapshot for the driver

[dim]Settings are read from cprflags.toml when present; options win.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    build_type: str | None = BuildTypeOption,
    system: str | None = SystemOption,
    fortran_id: str | None = FortranIdOption,
    c_id: str | None = CIdOption,
    color: bool | None = typer.Option(
        None, "--color/--no-color", help="Colourised NAG diagnostics (default: build.use_color)."
    ),
    all_profiles: bool = typer.Option(False, "--all-profiles", help="Show every build profile."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Also write the JSON snapshot to this file."
    ),
    json_output: bool = JsonOption,
) -> None:
    """Resolve and print compiler flags for one configuration run."""
    cfg = get_config(json_mode=json_output)
    identity = identity_from_config(cfg, os_name=system, fortran_id=fortran_id, c_id=c_id)

    try:
        resolved = resolve_project(cfg, identity=identity, build_type=build_type, use_color=color)
    except FileNotFoundError as exc:
        error_exit(str(exc), json_mode=json_output)

    registry = register_stop_failures(resolved.identity, cfg.test_names)
    data = resolved.to_dict()
    data["tests"] = {
        name: registry.get_property(name, FAIL_REGULAR_EXPRESSION) for name in cfg.test_names
    }
    if output is not None:
        atomic_write_json(output, data)

    # --- JSON output ---
    if json_output:
        json_print(data)
        return

    # --- Rich output ---
    console = Console(stderr=True)
    console.print()
    _render_flags(console, resolved, all_profiles)
    _render_definitions(console, resolved)
    for name, pattern in data["tests"].items():
        rule = f"fails on {pattern!r}" if pattern else "exit status only"
        console.print(f"[bold]Test:[/] {escape(name)} [dim]({escape(rule)})[/]")
    if output is not None:
        console.print(f"[green]Wrote {escape(str(output))}[/]")
    console.print()


def main_entry() -> None:
    """Run the resolve CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
