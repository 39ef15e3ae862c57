"""
Plan/result types for commands that write notes.

Each write command is split into a compute phase (pure, produces a plan
that can be shown as a dry run) and an execute phase (writes the note and
returns a result).
"""

import difflib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .audit_log import CreationSummary, ErasureCost, log_operation


@dataclass
class BasePlan(ABC):
    """Base class for operation plans (diagnostic output)."""
    vault_path: Path

    @abstractmethod
    def summary(self) -> str:
        """Human-readable summary of what would be done."""
        ...


@dataclass
class BaseResult:
    """Base class for operation results (action output)."""
    erased: ErasureCost = field(default_factory=ErasureCost)
    created: CreationSummary = field(default_factory=CreationSummary)
    success: bool = True
    error: str | None = None

    def log_to_audit(self, vault_path: Path, operation: str, metadata: dict[str, Any] | None = None) -> None:
        """Log this result to the audit trail."""
        log_operation(vault_path, operation, self.erased, self.created, metadata or {})


@dataclass
class ReferenceEditPlan(BasePlan):
    """Plan for a single edit of a note's References section."""
    operation: str  # "add", "edit", "delete", "cycle"
    note_path: Path
    original_lines: list[str] = field(default_factory=list)
    updated_lines: list[str] = field(default_factory=list)
    header_index: int | None = None
    description: str = ""
    newline: str = "\n"

    @property
    def changed(self) -> bool:
        return self.original_lines != self.updated_lines

    def removed_lines(self) -> int:
        return sum(i2 - i1 for tag, i1, i2, _, _ in self._opcodes() if tag in ("replace", "delete"))

    def added_lines(self) -> int:
        return sum(j2 - j1 for tag, _, _, j1, j2 in self._opcodes() if tag in ("replace", "insert"))

    def diff(self) -> str:
        return "\n".join(
            difflib.unified_diff(
                self.original_lines,
                self.updated_lines,
                fromfile=f"a/{self.note_path.name}",
                tofile=f"b/{self.note_path.name}",
                lineterm="",
            )
        )

    def summary(self) -> str:
        lines = [
            f"Reference {self.operation.capitalize()} Plan",
            f"  Note: {self.note_path}",
        ]
        if self.header_index is not None:
            lines.append(f"  Line: {self.header_index + 1}")
        if self.description:
            lines.append(f"  Change: {self.description}")
        lines.append(f"  Lines removed: {self.removed_lines()}, added: {self.added_lines()}")
        return "\n".join(lines)

    def _opcodes(self) -> list[tuple[str, int, int, int, int]]:
        matcher = difflib.SequenceMatcher(a=self.original_lines, b=self.updated_lines, autojunk=False)
        return matcher.get_opcodes()


@dataclass
class ReferenceEditResult(BaseResult):
    """Result of writing a reference edit."""
    output_path: Path | None = None
