"""Reference record codec and section editing.

Components:
- catalog: ordered type and status catalogs with total lookups
- codec: record <-> (header line, detail line), status advance
- locator: find the References section, record spans, insertion points
- editor: insert / replace / delete / cycle over a list of lines
- detect: type inference from URLs
"""

from .catalog import STATUS_CATALOG, TYPE_CATALOG, Catalog, CatalogEntry
from .codec import advance_status, decode_record, encode_record, star_string
from .detect import detect_type
from .editor import (
    cycle_status,
    delete_record,
    detect_newline,
    insert_record,
    join_document,
    read_record,
    replace_record,
    split_document,
)
from .locator import (
    SECTION_HEADING,
    find_insertion_point,
    find_records_section,
    is_record_header_line,
    iter_record_spans,
    resolve_edit_target,
)

__all__ = [
    "STATUS_CATALOG",
    "TYPE_CATALOG",
    "Catalog",
    "CatalogEntry",
    "advance_status",
    "decode_record",
    "encode_record",
    "star_string",
    "detect_type",
    "cycle_status",
    "delete_record",
    "detect_newline",
    "insert_record",
    "join_document",
    "read_record",
    "replace_record",
    "split_document",
    "SECTION_HEADING",
    "find_insertion_point",
    "find_records_section",
    "is_record_header_line",
    "iter_record_spans",
    "resolve_edit_target",
]
