"""Insert, replace, delete and cycle record spans in a note's lines.

Every function takes the document as a list of lines and returns a new
list; the caller's list is left untouched. Header indexes are expected to
come from ``resolve_edit_target`` or ``iter_record_spans``.
"""

from __future__ import annotations

from ..models import ReferenceRecord
from ..vault.resolver import NoteResolver
from .catalog import CatalogEntry
from .codec import advance_status_entry, decode_record, encode_record
from .locator import (
    SECTION_HEADING,
    find_insertion_point,
    find_records_section,
    is_detail_line,
)


CRLF = "\r\n"
LF = "\n"


def detect_newline(text: str) -> str:
    """Line ending used by a note: CRLF when any line carries one, else LF."""
    return CRLF if CRLF in text else LF


def split_document(text: str) -> list[str]:
    """Split note text into lines; a trailing newline leaves a final ''.

    CRLF endings are removed from every line; pass ``detect_newline(text)``
    to ``join_document`` to write them back.
    """
    lines = text.split(LF)
    if detect_newline(text) == CRLF:
        lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    return lines


def join_document(lines: list[str], newline: str = LF) -> str:
    return newline.join(lines)


def ensure_section(lines: list[str], heading: str = SECTION_HEADING) -> tuple[list[str], int]:
    """Return lines that contain the section heading, and its index.

    A missing heading is appended after a blank line at the end of the body.
    """
    existing = find_records_section(lines, heading)
    if existing is not None:
        return list(lines), existing

    trailing_newline = bool(lines) and lines[-1] == ""
    body = list(lines[:-1]) if trailing_newline else list(lines)
    if body and body[-1].strip():
        body.append("")
    body.append(f"## {heading}")
    section_index = len(body) - 1
    if trailing_newline:
        body.append("")
    return body, section_index


def insert_record(
    lines: list[str],
    record: ReferenceRecord,
    resolver: NoteResolver | None = None,
    heading: str = SECTION_HEADING,
) -> list[str]:
    """Add a record after the last existing record of the section."""
    updated, section_index = ensure_section(lines, heading)
    pos = find_insertion_point(updated, section_index)
    updated[pos:pos] = list(encode_record(record, resolver))
    return updated


def replace_record(
    lines: list[str],
    header_index: int,
    record: ReferenceRecord,
    resolver: NoteResolver | None = None,
) -> list[str]:
    """Overwrite the span at ``header_index`` with a newly encoded record.

    A header without a detail line gets one inserted below it.
    """
    _check_index(lines, header_index)
    header, detail = encode_record(record, resolver)

    updated = list(lines)
    updated[header_index] = header
    nxt = header_index + 1
    if nxt < len(updated) and is_detail_line(updated[nxt]):
        updated[nxt] = detail
    else:
        updated.insert(nxt, detail)
    return updated


def delete_record(lines: list[str], header_index: int) -> list[str]:
    """Remove the header line and the line after it."""
    _check_index(lines, header_index)
    return list(lines[:header_index]) + list(lines[header_index + 2 :])


def read_record(lines: list[str], header_index: int) -> ReferenceRecord:
    _check_index(lines, header_index)
    return decode_record(lines[header_index], _detail_for(lines, header_index))


def cycle_status(lines: list[str], header_index: int) -> tuple[list[str], CatalogEntry | None]:
    """Advance the status of the record at ``header_index``.

    Returns the new lines and the status now shown, or None (and the lines
    unchanged) when the span has no status field.
    """
    _check_index(lines, header_index)
    updated = list(lines)
    detail = _detail_for(lines, header_index)
    if detail is None:
        return updated, None

    new_detail, status = advance_status_entry(detail)
    if status is None:
        return updated, None

    updated[header_index + 1] = new_detail
    return updated, status


def _detail_for(lines: list[str], header_index: int) -> str | None:
    nxt = header_index + 1
    if nxt < len(lines) and is_detail_line(lines[nxt]):
        return lines[nxt]
    return None


def _check_index(lines: list[str], header_index: int) -> None:
    if header_index < 0 or header_index >= len(lines):
        raise IndexError(f"line {header_index} is outside the document ({len(lines)} lines)")
