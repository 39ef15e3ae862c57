"""Find the References section and record spans inside a note's lines."""

from __future__ import annotations

import re
from typing import Iterator

from ..models import RecordSpan
from .codec import HEADER_MARKER

SECTION_HEADING = "References"


def section_pattern(heading: str = SECTION_HEADING) -> re.Pattern[str]:
    """Pattern matching any line that contains ``## <heading>``."""
    return re.compile(rf"## {re.escape(heading)}")


def find_records_section(lines: list[str], heading: str = SECTION_HEADING) -> int | None:
    """Index of the first section heading line, or None."""
    pattern = section_pattern(heading)
    for i, line in enumerate(lines):
        if pattern.search(line):
            return i
    return None


def is_record_header_line(line: str) -> bool:
    return line.lstrip().startswith(HEADER_MARKER)


def is_detail_line(line: str) -> bool:
    """A line that can belong to the header above it."""
    return line.strip() != "" and not is_record_header_line(line)


def find_insertion_point(lines: list[str], section_index: int) -> int:
    """Index just past the run of records that follows the section heading.

    Each header line may carry one attached detail line. Scanning stops at
    the first line that is neither.
    """
    pos = section_index + 1
    while pos < len(lines) and is_record_header_line(lines[pos]):
        pos += 1
        if pos < len(lines) and is_detail_line(lines[pos]):
            pos += 1
    return pos


def resolve_edit_target(lines: list[str], cursor_index: int) -> int | None:
    """Header index for a cursor on a header line or on its detail line."""
    if cursor_index < 0 or cursor_index >= len(lines):
        return None
    if is_record_header_line(lines[cursor_index]):
        return cursor_index
    if cursor_index > 0 and is_record_header_line(lines[cursor_index - 1]):
        return cursor_index - 1
    return None


def iter_record_spans(lines: list[str], heading: str = SECTION_HEADING) -> Iterator[RecordSpan]:
    """Yield the record spans directly under the section heading, in order."""
    section_index = find_records_section(lines, heading)
    if section_index is None:
        return

    pos = section_index + 1
    while pos < len(lines) and is_record_header_line(lines[pos]):
        header_index = pos
        detail = None
        pos += 1
        if pos < len(lines) and is_detail_line(lines[pos]):
            detail = lines[pos]
            pos += 1
        yield RecordSpan(header_index=header_index, header_line=lines[header_index], detail_line=detail)
