"""Reference commands - add, edit, delete, cycle and list records in a note."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from ..audit_log import CreationSummary, ErasureCost, format_audit_entry, read_audit_log
from ..config import RefnoteConfig, load_config
from ..models import ReferenceRecord, clamp_rating
from ..planning import ReferenceEditPlan, ReferenceEditResult
from ..references.catalog import STATUS_CATALOG, TYPE_CATALOG
from ..references.codec import star_string
from ..references.detect import detect_type
from ..references.editor import (
    cycle_status,
    delete_record,
    detect_newline,
    insert_record,
    join_document,
    read_record,
    replace_record,
    split_document,
)
from ..references.locator import iter_record_spans, resolve_edit_target
from ..vault.resolver import VaultResolver, with_note_extension

NOT_ON_REFERENCE = "Place cursor on a reference line."


def resolve_note_file(vault_path: Path, note: str) -> Path:
    """Find the note file for a path given on the command line.

    Existing paths are used as-is; otherwise the name is looked up inside
    the vault, with ``.md`` appended when missing.
    """
    direct = Path(note)
    if direct.is_file():
        return direct
    candidate = vault_path / with_note_extension(note)
    if candidate.is_file():
        return candidate
    raise FileNotFoundError(f"Note not found: {note}")


def read_note(note_path: Path) -> tuple[list[str], str]:
    """Read a note as lines plus the line ending it uses.

    Raises ValueError when the note is not valid UTF-8.
    """
    try:
        with note_path.open(encoding="utf-8", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ValueError(f"Note is not valid UTF-8: {note_path} ({e.reason} at byte {e.start})") from e
    return split_document(text), detect_newline(text)



# -----------------------------------------------------------------------------
# Compute phase - pure, no writes
# -----------------------------------------------------------------------------


def compute_add_plan(
    vault_path: Path,
    note_path: Path,
    *,
    title: str,
    ref_type: str | None = None,
    target: str = "",
    status: str | None = None,
    rating: int = 0,
    config: RefnoteConfig | None = None,
) -> ReferenceEditPlan:
    config = config or load_config(vault_path)
    resolver = VaultResolver(vault_path)
    lines, newline = read_note(note_path)

    if ref_type is None:
        ref_type = detect_type(target)
    if ref_type is None:
        ref_type = "plain-note" if resolver.resolve_note_path(target) else config.default_type

    record = ReferenceRecord(
        type=ref_type,
        title=title,
        target=target,
        status=status or config.default_status,
        rating=clamp_rating(rating),
    )
    updated = insert_record(lines, record, resolver, heading=config.section_heading)

    return ReferenceEditPlan(
        vault_path=vault_path,
        operation="add",
        note_path=note_path,
        original_lines=lines,
        updated_lines=updated,
        description=f"add {record.title or record.target or 'reference'} ({TYPE_CATALOG.by_key(ref_type).label})",
        newline=newline,
    )


def compute_edit_plan(
    vault_path: Path,
    note_path: Path,
    line: int,
    *,
    title: str | None = None,
    ref_type: str | None = None,
    target: str | None = None,
    status: str | None = None,
    rating: int | None = None,
) -> ReferenceEditPlan:
    """Plan a replacement of the record at 1-based ``line``.

    Fields left as None keep their decoded values.
    """
    resolver = VaultResolver(vault_path)
    lines, newline = read_note(note_path)
    header_index = _edit_target(lines, line)

    record = read_record(lines, header_index)
    if title is not None:
        record.title = title
    if ref_type is not None:
        record.type = ref_type
    if target is not None:
        record.target = target
    if status is not None:
        record.status = status
    if rating is not None:
        record.rating = clamp_rating(rating)

    updated = replace_record(lines, header_index, record, resolver)

    return ReferenceEditPlan(
        vault_path=vault_path,
        operation="edit",
        note_path=note_path,
        original_lines=lines,
        updated_lines=updated,
        header_index=header_index,
        description=f"update {record.title}",
        newline=newline,
    )


def compute_delete_plan(vault_path: Path, note_path: Path, line: int) -> ReferenceEditPlan:
    lines, newline = read_note(note_path)
    header_index = _edit_target(lines, line)
    record = read_record(lines, header_index)

    return ReferenceEditPlan(
        vault_path=vault_path,
        operation="delete",
        note_path=note_path,
        original_lines=lines,
        updated_lines=delete_record(lines, header_index),
        header_index=header_index,
        description=f"delete {record.title}",
        newline=newline,
    )


def compute_cycle_plan(vault_path: Path, note_path: Path, line: int) -> ReferenceEditPlan:
    lines, newline = read_note(note_path)
    header_index = _edit_target(lines, line)

    updated, status = cycle_status(lines, header_index)
    if status is None:
        raise ValueError(f"Line {header_index + 1} has no status field to cycle.")

    return ReferenceEditPlan(
        vault_path=vault_path,
        operation="cycle",
        note_path=note_path,
        original_lines=lines,
        updated_lines=updated,
        header_index=header_index,
        description=f"Status → {status.label}",
        newline=newline,
    )


def _edit_target(lines: list[str], line: int) -> int:
    header_index = resolve_edit_target(lines, line - 1)
    if header_index is None:
        raise ValueError(NOT_ON_REFERENCE)
    return header_index


# -----------------------------------------------------------------------------
# Execute phase - writes the note
# -----------------------------------------------------------------------------


def execute_reference_plan(plan: ReferenceEditPlan) -> ReferenceEditResult:
    """Write the plan's updated lines back to its note."""
    if not plan.changed:
        return ReferenceEditResult(success=True, output_path=plan.note_path)

    existing = join_document(plan.original_lines, plan.newline)
    updated = join_document(plan.updated_lines, plan.newline)
    try:
        with plan.note_path.open("w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except OSError as e:
        return ReferenceEditResult(success=False, error=f"Failed to write {plan.note_path}: {e}")

    erased_records = 1 if plan.operation in ("edit", "delete") else 0
    created_records = 1 if plan.operation in ("add", "edit") else 0
    return ReferenceEditResult(
        erased=ErasureCost(
            records=erased_records,
            lines=plan.removed_lines(),
            bytes_erased=len(existing.encode("utf-8")),
        ),
        created=CreationSummary(
            records=created_records,
            lines=plan.added_lines(),
            bytes_written=len(updated.encode("utf-8")),
        ),
        success=True,
        output_path=plan.note_path,
    )


def _run_plan(plan: ReferenceEditPlan, dry_run: bool, console: Console) -> int:
    if dry_run:
        console.print("\n[bold]DRY RUN[/bold] - No changes will be made\n")
        console.print(plan.summary())
        if plan.changed:
            console.print(Syntax(plan.diff(), "diff", theme="monokai"))
        return 0

    result = execute_reference_plan(plan)
    if not result.success:
        console.print(str(result.error), style="red")
        return 1

    if plan.changed:
        result.log_to_audit(
            plan.vault_path,
            f"reference-{plan.operation}",
            metadata={
                "note": str(plan.note_path),
                "line": (plan.header_index + 1) if plan.header_index is not None else None,
                "change": plan.description,
            },
        )
    console.print(f"Reference {_past_tense(plan.operation)}: {plan.note_path}", style="green")
    if plan.operation == "cycle":
        console.print(plan.description)
    return 0


def _past_tense(operation: str) -> str:
    return {"add": "added", "edit": "updated", "delete": "deleted", "cycle": "updated"}.get(operation, operation)


def _run(compute, vault_path: Path, note: str, dry_run: bool, *args, **kwargs) -> int:
    console = Console(stderr=True)
    try:
        note_path = resolve_note_file(vault_path, note)
        plan = compute(vault_path, note_path, *args, **kwargs)
    except FileNotFoundError as e:
        console.print(str(e), style="red")
        return 1
    except ValueError as e:
        console.print(f"⛔️ {e}", style="red")
        return 1
    return _run_plan(plan, dry_run, console)


# -----------------------------------------------------------------------------
# Command entry points
# -----------------------------------------------------------------------------


def run_add(
    vault_path: Path,
    note: str,
    *,
    title: str,
    ref_type: str | None = None,
    target: str = "",
    status: str | None = None,
    rating: int = 0,
    dry_run: bool = False,
) -> int:
    return _run(
        compute_add_plan,
        vault_path,
        note,
        dry_run,
        title=title,
        ref_type=ref_type,
        target=target,
        status=status,
        rating=rating,
    )


def run_edit(
    vault_path: Path,
    note: str,
    line: int,
    *,
    title: str | None = None,
    ref_type: str | None = None,
    target: str | None = None,
    status: str | None = None,
    rating: int | None = None,
    dry_run: bool = False,
) -> int:
    return _run(
        compute_edit_plan,
        vault_path,
        note,
        dry_run,
        line,
        title=title,
        ref_type=ref_type,
        target=target,
        status=status,
        rating=rating,
    )


def run_delete(vault_path: Path, note: str, line: int, *, dry_run: bool = False) -> int:
    return _run(compute_delete_plan, vault_path, note, dry_run, line)


def run_cycle(vault_path: Path, note: str, line: int, *, dry_run: bool = False) -> int:
    return _run(compute_cycle_plan, vault_path, note, dry_run, line)


def run_list(vault_path: Path, note: str, *, output_json: bool = False) -> int:
    """Show the records of a note's References section."""
    err = Console(stderr=True)
    try:
        note_path = resolve_note_file(vault_path, note)
        config = load_config(vault_path)
        lines, _ = read_note(note_path)
    except FileNotFoundError as e:
        err.print(str(e), style="red")
        return 1
    except ValueError as e:
        err.print(f"⛔️ {e}", style="red")
        return 1

    rows = []
    for span in iter_record_spans(lines, heading=config.section_heading):
        rows.append((span.header_index + 1, read_record(lines, span.header_index)))

    if output_json:
        payload = [{"line": line, **record.to_dict()} for line, record in rows]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    if not rows:
        err.print(f"No references found in {note_path}", style="yellow")
        return 0

    table = Table(title=f"References: {note_path.name}")
    table.add_column("line", style="dim", justify="right")
    table.add_column("type", style="magenta")
    table.add_column("title", style="cyan")
    table.add_column("target")
    table.add_column("status")
    table.add_column("rating")
    for line, record in rows:
        status = STATUS_CATALOG.by_key(record.status)
        table.add_row(
            str(line),
            TYPE_CATALOG.by_key(record.type).display,
            escape(record.title),
            escape(record.target),
            status.display,
            star_string(record.rating),
        )
    Console().print(table)
    return 0


def run_log(vault_path: Path, *, last: int | None = None) -> int:
    console = Console()
    entries = read_audit_log(vault_path, last_n=last)
    if not entries:
        Console(stderr=True).print("Audit log is empty", style="yellow")
        return 0
    for entry in entries:
        console.print(format_audit_entry(entry), markup=False, highlight=False)
    return 0
