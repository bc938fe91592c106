"""cprflags cfg: Programmatic editor for cprflags.toml.

Uses tomlkit for format-preserving round-trip editing (comments,
ordering, and whitespace are retained).

Usage::

    cprflags cfg init --fortran GNU --c GNU --build-type HARSH
    cprflags cfg path
    cprflags cfg show [KEY]
    cprflags cfg set build.type Debug
    cprflags cfg set-profile Debug --fortran "-g -O0" --c "-g -O0"
"""

import contextlib
from pathlib import Path

import tomlkit
import typer

from cprflags.config import CONFIG_FILENAME
from cprflags.profiles import FORCED_BUILD_TYPES, canonical_build_type
from cprflags.utils import atomic_write_text

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _find_root() -> Path:
    """Walk up from cwd to find cprflags.toml."""
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    typer.secho(
        f"Error: Could not find {CONFIG_FILENAME} in any parent directory.\n"
        "Run this command from within a project, or use 'cprflags cfg init' first.",
        fg=typer.colors.RED,
        err=True,
    )
    raise typer.Exit(code=1)


def _load_toml(root: Path | None = None) -> tuple[tomlkit.TOMLDocument, Path]:
    """Load cprflags.toml as a tomlkit document, preserving formatting."""
    if root is None:
        root = _find_root()
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        typer.secho(f"Error: {toml_path} not found.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    doc = tomlkit.parse(toml_path.read_text(encoding="utf-8"))
    return doc, toml_path


def _save_toml(doc: tomlkit.TOMLDocument, path: Path) -> None:
    """Write tomlkit document back, preserving formatting."""
    atomic_write_text(path, tomlkit.dumps(doc))


def _coerce(value: str) -> str | int | float | bool:
    """Coerce a CLI string to bool/int/float where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        with contextlib.suppress(ValueError):
            return float(value)
    return value


def _new_document(fortran: str, c: str, system: str | None, build_type: str) -> tomlkit.TOMLDocument:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("cprflags project configuration"))

    toolchain = tomlkit.table()
    if system:
        toolchain.add("system", system)
    toolchain.add("fortran", fortran)
    toolchain.add("c", c)
    doc.add("toolchain", toolchain)

    build = tomlkit.table()
    build.add("type", build_type)
    build.add("binary_dir", "build")
    build.add("source_dir", ".")
    build.add("use_color", False)
    doc.add("build", build)

    tests = tomlkit.table()
    tests.add("names", tomlkit.array())
    doc.add("tests", tests)
    return doc


# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Read and edit cprflags.toml programmatically.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  cprflags cfg init -F NAG -C GNU                Create cprflags.toml in the cwd
  cprflags cfg show build.type                   Read a config value
  cprflags cfg set build.use_color true          Set a config value
  cprflags cfg set-profile Release --c "-O2"     Override a standard profile

[dim]Supports dotted key paths for nested TOML tables
(e.g. 'profiles.Debug.fortran').[/dim]""",
)


@app.command("init")
def init(
    fortran: str = typer.Option("GNU", "--fortran", "-F", help="Fortran compiler id."),
    c: str = typer.Option("GNU", "--c", "-C", help="C compiler id."),
    system: str | None = typer.Option(None, "--system", help="OS name (default: detect at run)."),
    build_type: str = typer.Option("Debug", "--build-type", "-b", help="Selected build type."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Create cprflags.toml in the current directory."""
    toml_path = Path.cwd() / CONFIG_FILENAME
    if toml_path.exists() and not force:
        typer.secho(f"{CONFIG_FILENAME} already exists (use --force).", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    _save_toml(_new_document(fortran, c, system, canonical_build_type(build_type)), toml_path)
    typer.secho(f"Created {toml_path}", fg=typer.colors.GREEN)


@app.command("path")
def path() -> None:
    """Print the path to cprflags.toml."""
    typer.echo(str(_find_root() / CONFIG_FILENAME))


@app.command("show")
def show(
    key: str | None = typer.Argument(None, help="Dot-separated key to show, e.g. 'build.type'"),
) -> None:
    """Show the current config, or a specific key."""
    doc, _ = _load_toml()

    if key is None:
        typer.echo(tomlkit.dumps(doc))
        return

    current = doc
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            typer.secho(f"Key '{key}' not found.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if isinstance(current, dict):
        typer.echo(tomlkit.dumps(current))
    else:
        typer.echo(str(current))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. 'build.type'."),
    value: str = typer.Argument(..., help="Value to set."),
) -> None:
    """Set a scalar config key."""
    doc, toml_path = _load_toml()

    parts = key.split(".")
    current = doc
    for part in parts[:-1]:
        if part not in current:
            current[part] = tomlkit.table()
        current = current[part]
        if not isinstance(current, dict):
            typer.secho(f"Key '{key}' goes through non-table value '{part}'.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    parsed_value = _coerce(value)
    current[parts[-1]] = parsed_value
    _save_toml(doc, toml_path)
    typer.secho(f"Set {key} = {parsed_value!r}", fg=typer.colors.GREEN)


@app.command("set-profile")
def set_profile(
    name: str = typer.Argument(..., help="Standard profile name (Debug, Release, ...)."),
    fortran: str | None = typer.Option(None, "--fortran", help="Fortran flags for the profile."),
    c: str | None = typer.Option(None, "--c", help="C flags for the profile."),
) -> None:
    """Override the starting flags of a standard build profile."""
    canonical = canonical_build_type(name)
    if canonical in FORCED_BUILD_TYPES:
        typer.secho(
            f"Error: {canonical} is reset on every run and cannot be overridden.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    if fortran is None and c is None:
        typer.secho("Nothing to set: pass --fortran and/or --c.", fg=typer.colors.YELLOW)
        return

    doc, toml_path = _load_toml()
    profiles = doc.get("profiles")
    if profiles is None:
        profiles = tomlkit.table(is_super_table=True)
        doc["profiles"] = profiles
    table = profiles.get(canonical)
    if table is None:
        table = tomlkit.table()
        profiles[canonical] = table
    if fortran is not None:
        table["fortran"] = fortran
    if c is not None:
        table["c"] = c
    _save_toml(doc, toml_path)
    typer.secho(f"Updated [profiles.{canonical}]", fg=typer.colors.GREEN)
