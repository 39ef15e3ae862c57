"""Encode and decode reference records as two markdown lines.

A record span looks like::

    ### [Intro to Rust](https://youtu.be/abc)
    🎥 Video | 🔄 **In Progress** | ★★★☆☆

The first line is the header (a level-3 heading holding a link expression),
the second the detail line (type, status and rating separated by ``|``).
"""

from __future__ import annotations

import re

from ..models import ReferenceRecord, clamp_rating, MAX_RATING
from ..vault.resolver import NoteResolver, strip_note_extension, with_note_extension
from .catalog import STATUS_CATALOG, TYPE_CATALOG, CatalogEntry

HEADER_MARKER = "###"
FIELD_SEPARATOR = " | "
FILLED_STAR = "★"
EMPTY_STAR = "☆"
UNRATED = "⚪ Not Rated"
UNTITLED = "Untitled"

# Match [[path]], [[path|alias]], [[path#section]], [[path#section|alias]];
# the alias runs to the last "]]" so it may end in a "]"
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]*)?(?:\|(.+?))?\]\](?!\])")

# Match [title](target); the title may hold one level of [brackets],
# the target may contain spaces or parentheses
MARKDOWN_LINK_PATTERN = re.compile(r"\[((?:[^\[\]]|\[[^\[\]]*\])+)\]\((.*?)\)(?=\s|$)")

HEADING_PREFIX_PATTERN = re.compile(r"^\s*#+\s*")
LEADING_TOKEN_PATTERN = re.compile(r"^(\S+)")
STATUS_LABEL_PATTERN = re.compile(r"\*\*([^*]+)\*\*")

# "| <icon> **<label>**" - the only part of a detail line a status advance touches
STATUS_SPAN_PATTERN = re.compile(r"\|\s+\S+\s+\*\*(.+?)\*\*")

NEWLINE_PATTERN = re.compile(r"\s*[\r\n]+\s*")


def star_string(rating: int) -> str:
    """Render a rating as star glyphs, or the unrated marker for 0."""
    n = clamp_rating(rating)
    if n == 0:
        return UNRATED
    return FILLED_STAR * n + EMPTY_STAR * (MAX_RATING - n)


def count_stars(text: str) -> int:
    return min(text.count(FILLED_STAR), MAX_RATING)


def encode_record(record: ReferenceRecord, resolver: NoteResolver | None = None) -> tuple[str, str]:
    """Encode a record as its (header line, detail line) pair.

    Plain-note records whose target resolves through ``resolver`` become
    wiki-links; everything else uses a markdown link, or bare text when
    there is no target.
    """
    type_info = TYPE_CATALOG.by_key(record.type)
    status_info = STATUS_CATALOG.by_key(record.status)

    title = _single_line(record.title)
    target = _single_line(record.target)

    base_name = None
    if type_info.key == "plain-note" and target and resolver is not None:
        handle = resolver.resolve_note_path(target)
        if handle is not None:
            base_name = resolver.note_base_name(handle)

    if not title:
        title = base_name or target or UNTITLED

    if base_name is not None:
        link_path = strip_note_extension(target)
        if title == base_name:
            link = f"[[{link_path}]]"
        else:
            link = f"[[{link_path}|{title}]]"
    elif target:
        link = f"[{title}]({target})"
    else:
        link = title

    header = f"{HEADER_MARKER} {link}"
    detail = FIELD_SEPARATOR.join(
        [
            type_info.display,
            f"{status_info.icon} **{status_info.label}**",
            star_string(record.rating),
        ]
    )
    return header, detail


def decode_record(header_line: str, detail_line: str | None = None) -> ReferenceRecord:
    """Decode a record span. Never raises; unparseable fields take defaults."""
    title, target = _decode_header(header_line or "")

    type_info = TYPE_CATALOG.default
    status_info = STATUS_CATALOG.default
    rating = 0

    parts = [p.strip() for p in (detail_line or "").split("|")]

    if parts and parts[0]:
        m = LEADING_TOKEN_PATTERN.match(parts[0])
        if m:
            type_info = TYPE_CATALOG.by_icon(m.group(1))

    if len(parts) > 1:
        m = STATUS_LABEL_PATTERN.search(parts[1])
        if m:
            status_info = STATUS_CATALOG.by_label(m.group(1))

    if len(parts) > 2:
        rating = count_stars(parts[2])

    return ReferenceRecord(
        type=type_info.key,
        title=title,
        target=target,
        status=status_info.key,
        rating=rating,
    )


def advance_status_entry(detail_line: str) -> tuple[str, CatalogEntry | None]:
    """Advance the status of a detail line and report the new status.

    Returns the line unchanged and ``None`` when it has no status span.
    """
    match = STATUS_SPAN_PATTERN.search(detail_line)
    if match is None:
        return detail_line, None

    current = STATUS_CATALOG.find_by_label(match.group(1))
    index = STATUS_CATALOG.index_of(current.key) if current else -1
    nxt = STATUS_CATALOG.next_after(index)

    replacement = f"| {nxt.icon} **{nxt.label}**"
    return detail_line[: match.start()] + replacement + detail_line[match.end() :], nxt


def advance_status(detail_line: str) -> str:
    """Move a detail line's status to the next entry in the cycle.

    Only the ``| <icon> **<label>**`` span is rewritten.
    """
    line, _ = advance_status_entry(detail_line)
    return line


def _decode_header(header_line: str) -> tuple[str, str]:
    text = HEADING_PREFIX_PATTERN.sub("", header_line, count=1).strip()

    m = WIKILINK_PATTERN.search(text)
    if m:
        link_path = m.group(1).strip()
        alias = (m.group(2) or "").strip()
        title = alias or link_path.split("/")[-1] or link_path
        return title, with_note_extension(link_path)

    m = MARKDOWN_LINK_PATTERN.search(text)
    if m:
        return m.group(1), m.group(2)

    return text, ""


def _single_line(value: str | None) -> str:
    return NEWLINE_PATTERN.sub(" ", (value or "").strip())
