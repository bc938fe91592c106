"""stop_cli.py – Classify a Fortran test run using the stop-failure rule.

Installs the Fortran vendor's stop-failure rule on the named test, then
classifies the captured output and exit status the way the test harness
would.  Exits 1 when the run counts as failed.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cprflags.cli import FortranIdOption, JsonOption, SystemOption, error_exit, get_config, json_print
from cprflags.resolver import identity_from_config, register_stop_failures
from cprflags.stopcodes import FAIL_REGULAR_EXPRESSION

_EPILOG = """\
[bold]Examples:[/bold]

./test_kinds > out.txt; cprflags check-stop test_kinds out.txt --returncode $?

./test_kinds | cprflags check-stop test_kinds - -F NAG

[dim]With NAG, "STOP: 1" .. "STOP: 9" in the output marks the test failed
regardless of exit status.  Other compilers rely on the exit status.[/dim]"""

app = typer.Typer(
    help="Classify a test run's STOP code as pass or fail.",
    rich_markup_mode="rich",
)


@app.command(epilog=_EPILOG)
def main(
    test_name: str = typer.Argument(..., help="Name of the test."),
    output_file: str = typer.Argument("-", help="Captured test output ('-' for stdin)."),
    returncode: int = typer.Option(0, "--returncode", "-r", help="Exit status of the test run."),
    system: str | None = SystemOption,
    fortran_id: str | None = FortranIdOption,
    json_output: bool = JsonOption,
) -> None:
    """Classify one test run."""
    cfg = get_config(json_mode=json_output)
    identity = identity_from_config(cfg, os_name=system, fortran_id=fortran_id)

    if output_file == "-":
        output = sys.stdin.read()
    else:
        try:
            output = Path(output_file).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            error_exit(f"Cannot read {output_file}: {exc}", json_mode=json_output)

    registry = register_stop_failures(identity, [test_name])
    outcome = registry.classify(test_name, output, returncode)

    if json_output:
        data = outcome.to_dict()
        data["fail_pattern"] = registry.get_property(test_name, FAIL_REGULAR_EXPRESSION)
        json_print(data)
    else:
        console = Console(stderr=True)
        verdict = "[red bold]FAILED[/]" if outcome.failed else "[green bold]PASSED[/]"
        console.print(f"{escape(test_name)}: {verdict} ({escape(outcome.reason)})")

    if outcome.failed:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Run the check-stop CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
