"""Resolve vault-relative note paths to files on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

NOTE_EXTENSION = ".md"


@dataclass(frozen=True)
class NoteHandle:
    """An existing note inside a vault."""

    path: str  # vault-relative, forward slashes
    base_name: str  # filename without extension


class NoteResolver(Protocol):
    def resolve_note_path(self, path: str) -> NoteHandle | None: ...

    def note_base_name(self, handle: NoteHandle) -> str: ...


class VaultResolver:
    """Filesystem-backed resolver rooted at a vault directory.

    Paths are matched exactly (no extension guessing). Paths that point
    outside the vault never resolve.
    """

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = Path(vault_path).resolve()

    def resolve_note_path(self, path: str) -> NoteHandle | None:
        rel = (path or "").strip().replace("\\", "/").lstrip("/")
        if not rel:
            return None

        candidate = (self.vault_path / rel).resolve()
        try:
            candidate.relative_to(self.vault_path)
        except ValueError:
            return None

        if not candidate.is_file():
            return None
        return NoteHandle(path=rel, base_name=candidate.stem)

    def note_base_name(self, handle: NoteHandle) -> str:
        return handle.base_name


def strip_note_extension(path: str) -> str:
    if path.endswith(NOTE_EXTENSION):
        return path[: -len(NOTE_EXTENSION)]
    return path


def with_note_extension(path: str) -> str:
    if path.endswith(NOTE_EXTENSION):
        return path
    return path + NOTE_EXTENSION
