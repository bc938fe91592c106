"""detect_cli.py – Show the detected toolchain identity.

Prints the OS, the Fortran and C compiler ids, the derived compiler name,
and the always-on macros.  Compiler ids can be given directly, taken from
cprflags.toml, or probed from a compiler command.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cprflags.cli import CIdOption, FortranIdOption, JsonOption, SystemOption, get_config, json_print
from cprflags.probe import probe_compiler_id
from cprflags.resolver import identity_from_config

app = typer.Typer(
    help="Show the detected OS, compiler vendors and toolchain macros.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

cprflags detect                                From cprflags.toml / this host

cprflags detect --probe-fortran gfortran       Probe a compiler's version banner

cprflags detect -F XL --json                   Machine-readable output

[dim]Unrecognized compiler ids are not an error: they produce no
compiler macro and no vendor flags.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    system: str | None = SystemOption,
    fortran_id: str | None = FortranIdOption,
    c_id: str | None = CIdOption,
    probe_fortran: str | None = typer.Option(
        None, "--probe-fortran", help="Fortran compiler command to probe for its vendor."
    ),
    probe_c: str | None = typer.Option(None, "--probe-c", help="C compiler command to probe."),
    json_output: bool = JsonOption,
) -> None:
    """Print the toolchain identity and the macros it defines."""
    cfg = get_config(json_mode=json_output)
    if probe_fortran is not None:
        fortran_id = probe_compiler_id(probe_fortran)
    if probe_c is not None:
        c_id = probe_compiler_id(probe_c)
    identity = identity_from_config(cfg, os_name=system, fortran_id=fortran_id, c_id=c_id)

    if json_output:
        data = identity.to_dict()
        data["macros"] = list(identity.macros)
        json_print(data)
        return

    console = Console(stderr=True)
    tbl = Table(show_header=False, box=None, padding=(0, 2))
    tbl.add_column("Key", style="dim")
    tbl.add_column("Value")
    tbl.add_row("OS", escape(identity.os_name))
    tbl.add_row("Fortran id", escape(identity.fortran_id) or "[yellow]unrecognized[/]")
    tbl.add_row("C id", escape(identity.c_id) or "[yellow]unrecognized[/]")
    tbl.add_row("Compiler name", identity.compiler_name or "[yellow]none[/]")
    tbl.add_row("Macros", escape(" ".join(f"-D{m}" for m in identity.macros)))
    console.print(tbl)


def main_entry() -> None:
    """Run the detect CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
