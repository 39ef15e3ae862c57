"""
Audit log for reference edits.

Every write to a note is appended to ``<vault>/.refnote/audit.log`` as one
JSON object per line, with a summary of the lines removed and added.
"""

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class ErasureCost:
    """Summary of what was erased in an operation."""
    records: int = 0
    lines: int = 0
    bytes_erased: int = 0


@dataclass
class CreationSummary:
    """Summary of what was created in an operation."""
    records: int = 0
    lines: int = 0
    bytes_written: int = 0


@dataclass
class AuditEntry:
    """A single audit log entry."""
    timestamp: str
    operation: str
    erased: ErasureCost
    created: CreationSummary
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "operation": self.operation,
            "erased": asdict(self.erased),
            "created": asdict(self.created),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        return cls(
            timestamp=data["timestamp"],
            operation=data["operation"],
            erased=ErasureCost(**data.get("erased", {})),
            created=CreationSummary(**data.get("created", {})),
            metadata=data.get("metadata", {}),
        )


def get_audit_log_path(vault_path: Path) -> Path:
    return vault_path / ".refnote" / "audit.log"


def log_operation(
    vault_path: Path,
    operation: str,
    erased: ErasureCost | None = None,
    created: CreationSummary | None = None,
    metadata: dict[str, Any] | None = None,
) -> AuditEntry:
    """
    Append an operation to the audit log.

    Args:
        vault_path: Vault root directory
        operation: Name of the operation (e.g., "reference-add", "reference-delete")
        erased: Summary of what was removed
        created: Summary of what was written
        metadata: Additional context (e.g., note path, line number)

    Returns:
        The created audit entry
    """
    entry = AuditEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        operation=operation,
        erased=erased or ErasureCost(),
        created=created or CreationSummary(),
        metadata=metadata or {},
    )

    log_path = get_audit_log_path(vault_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    with log_path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    return entry


def read_audit_log(vault_path: Path, last_n: int | None = None) -> list[AuditEntry]:
    """
    Read entries from the audit log, oldest first.

    Malformed lines are skipped.
    """
    log_path = get_audit_log_path(vault_path)
    if not log_path.exists():
        return []

    entries = []
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(AuditEntry.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, TypeError):
                continue

    if last_n is not None:
        return entries[-last_n:]
    return entries


def format_audit_entry(entry: AuditEntry) -> str:
    """Format an audit entry for human-readable display."""
    lines = [f"[{entry.timestamp}] {entry.operation}"]

    if entry.erased.records or entry.erased.lines:
        lines.append(f"  Erased: {entry.erased.records} records, {entry.erased.lines} lines")
    if entry.created.records or entry.created.lines:
        lines.append(f"  Created: {entry.created.records} records, {entry.created.lines} lines")

    for key, value in entry.metadata.items():
        lines.append(f"  {key}: {value}")

    return "\n".join(lines)
