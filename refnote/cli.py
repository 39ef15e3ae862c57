"""CLI entrypoint for refnote."""

import sys
from pathlib import Path

import click

from . import __version__
from .references.catalog import STATUS_CATALOG, TYPE_CATALOG


def _auto_detect_vault(start: Path) -> Path:
    """Nearest ancestor of `start` holding an .obsidian folder, else `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / ".obsidian").is_dir():
            return p
    return cur


@click.group()
@click.version_option(__version__, prog_name="refnote")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to vault root (defaults to the nearest folder containing .obsidian, else cwd)",
)
@click.pass_context
def cli(ctx: click.Context, vault: Path | None) -> None:
    """refnote - Manage reference lists inside markdown notes.

    Each reference is a two-line entry under a note's "## References"
    heading: a linked title and a type | status | rating line.
    """
    ctx.ensure_object(dict)
    if vault is None:
        vault = _auto_detect_vault(Path.cwd())

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    ctx.obj["vault"] = vault.resolve()


def _record_options(required_title: bool):
    """Shared field options for add/edit."""

    def decorator(f):
        options = [
            click.option(
                "--title",
                "-t",
                required=required_title,
                default=None,
                help="Display title of the reference",
            ),
            click.option(
                "--type",
                "ref_type",
                type=click.Choice(TYPE_CATALOG.keys),
                default=None,
                help="Reference type (add: detected from --target when omitted)",
            ),
            click.option(
                "--target",
                "-u",
                default=None,
                help="URL, or vault-relative note path for plain-note references",
            ),
            click.option(
                "--status",
                "-s",
                type=click.Choice(STATUS_CATALOG.keys),
                default=None,
                help="Reading status",
            ),
            click.option(
                "--rating",
                "-r",
                type=click.IntRange(0, 5),
                default=None,
                help="Quality rating, 1 (low) to 5 (high); 0 for not rated",
            ),
        ]
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


_dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be done without writing the note",
)

_line_option = click.option(
    "--line",
    "-l",
    type=click.IntRange(min=1),
    required=True,
    help="1-based line of the reference header (or the detail line below it)",
)


@cli.command()
@click.argument("note")
@_record_options(required_title=True)
@_dry_run_option
@click.pass_context
def add(
    ctx: click.Context,
    note: str,
    title: str,
    ref_type: str | None,
    target: str | None,
    status: str | None,
    rating: int | None,
    dry_run: bool,
) -> None:
    """Add a reference to a note's References section.

    The section is created at the end of the note when missing.

    Examples:

        refnote add "Rust notes" -t "Intro to Rust" -u https://youtu.be/abc -s in-progress -r 3

        refnote add reading/list.md -t "Ownership" -u concepts/Ownership.md
    """
    from .commands.references import run_add

    exit_code = run_add(
        ctx.obj["vault"],
        note,
        title=title,
        ref_type=ref_type,
        target=target or "",
        status=status,
        rating=rating or 0,
        dry_run=dry_run,
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("note")
@_line_option
@_record_options(required_title=False)
@_dry_run_option
@click.pass_context
def edit(
    ctx: click.Context,
    note: str,
    line: int,
    title: str | None,
    ref_type: str | None,
    target: str | None,
    status: str | None,
    rating: int | None,
    dry_run: bool,
) -> None:
    """Edit the reference at --line, keeping fields that are not given."""
    from .commands.references import run_edit

    exit_code = run_edit(
        ctx.obj["vault"],
        note,
        line,
        title=title,
        ref_type=ref_type,
        target=target,
        status=status,
        rating=rating,
        dry_run=dry_run,
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("note")
@_line_option
@_dry_run_option
@click.pass_context
def delete(ctx: click.Context, note: str, line: int, dry_run: bool) -> None:
    """Delete the reference at --line (header and detail line)."""
    from .commands.references import run_delete

    sys.exit(run_delete(ctx.obj["vault"], note, line, dry_run=dry_run))


@cli.command()
@click.argument("note")
@_line_option
@_dry_run_option
@click.pass_context
def cycle(ctx: click.Context, note: str, line: int, dry_run: bool) -> None:
    """Advance the status of the reference at --line to the next one."""
    from .commands.references import run_cycle

    sys.exit(run_cycle(ctx.obj["vault"], note, line, dry_run=dry_run))


@cli.command("list")
@click.argument("note")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output records as JSON",
)
@click.pass_context
def list_references(ctx: click.Context, note: str, output_json: bool) -> None:
    """List the references in a note."""
    from .commands.references import run_list

    sys.exit(run_list(ctx.obj["vault"], note, output_json=output_json))


@cli.command()
@click.option("--last", type=click.IntRange(min=1), default=None, help="Show only the last N entries")
@click.pass_context
def log(ctx: click.Context, last: int | None) -> None:
    """Show the audit log of reference edits."""
    from .commands.references import run_log

    sys.exit(run_log(ctx.obj["vault"], last=last))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
