from pathlib import Path

from refnote.audit_log import (
    CreationSummary,
    ErasureCost,
    format_audit_entry,
    get_audit_log_path,
    log_operation,
    read_audit_log,
)


def test_log_and_read(vault_path: Path) -> None:
    log_operation(
        vault_path,
        "reference-add",
        created=CreationSummary(records=1, lines=2, bytes_written=120),
        metadata={"note": "reading.md"},
    )
    log_operation(vault_path, "reference-delete", erased=ErasureCost(records=1, lines=2, bytes_erased=120))

    entries = read_audit_log(vault_path)

    assert [e.operation for e in entries] == ["reference-add", "reference-delete"]
    assert entries[0].created.lines == 2
    assert entries[0].metadata == {"note": "reading.md"}
    assert entries[1].erased.records == 1
    assert [e.operation for e in read_audit_log(vault_path, last_n=1)] == ["reference-delete"]


def test_read_missing_log(vault_path: Path) -> None:
    assert read_audit_log(vault_path) == []


def test_malformed_lines_are_skipped(vault_path: Path) -> None:
    log_operation(vault_path, "reference-cycle")
    with get_audit_log_path(vault_path).open("a", encoding="utf-8") as f:
        f.write("{not json\n")
        f.write('{"operation": "missing timestamp"}\n')

    assert [e.operation for e in read_audit_log(vault_path)] == ["reference-cycle"]


def test_format_audit_entry(vault_path: Path) -> None:
    entry = log_operation(
        vault_path,
        "reference-edit",
        erased=ErasureCost(records=1, lines=2),
        created=CreationSummary(records=1, lines=2),
        metadata={"line": 4},
    )

    text = format_audit_entry(entry)

    assert "reference-edit" in text
    assert "Erased: 1 records, 2 lines" in text
    assert "Created: 1 records, 2 lines" in text
    assert "line: 4" in text
