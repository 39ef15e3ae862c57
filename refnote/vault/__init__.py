"""Vault access for reference records."""

from .resolver import NoteHandle, NoteResolver, VaultResolver, strip_note_extension, with_note_extension

__all__ = [
    "NoteHandle",
    "NoteResolver",
    "VaultResolver",
    "strip_note_extension",
    "with_note_extension",
]
