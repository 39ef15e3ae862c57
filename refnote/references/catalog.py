"""Type and status catalogs for reference records.

Both catalogs are ordered. The status order is the cycle used by
``advance_status``; the type order only matters for the fallback, which is
always the first entry.
"""

from __future__ import annotations

from dataclasses import dataclass

VARIATION_SELECTOR = "\ufe0f"


@dataclass(frozen=True)
class CatalogEntry:
    key: str
    label: str
    icon: str

    @property
    def display(self) -> str:
        return f"{self.icon} {self.label}"


class Catalog:
    """Ordered, immutable set of entries with total lookups.

    ``by_key``, ``by_label`` and ``by_icon`` never fail: an unknown value
    resolves to the first entry.
    """

    def __init__(self, name: str, entries: tuple[CatalogEntry, ...]) -> None:
        if not entries:
            raise ValueError(f"catalog {name!r} needs at least one entry")
        self.name = name
        self.entries = entries
        self._by_key = {e.key: e for e in entries}
        self._by_label = {e.label: e for e in entries}
        self._by_icon = {_normalize_icon(e.icon): e for e in entries}

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def default(self) -> CatalogEntry:
        return self.entries[0]

    @property
    def keys(self) -> list[str]:
        return [e.key for e in self.entries]

    def by_key(self, key: str | None) -> CatalogEntry:
        return self._by_key.get((key or "").strip(), self.default)

    def by_label(self, label: str | None) -> CatalogEntry:
        return self.find_by_label(label) or self.default

    def by_icon(self, icon: str | None) -> CatalogEntry:
        return self._by_icon.get(_normalize_icon(icon or ""), self.default)

    def find_by_label(self, label: str | None) -> CatalogEntry | None:
        return self._by_label.get((label or "").strip())

    def index_of(self, key: str | None) -> int:
        """Position of ``key`` in the catalog, or -1 when absent."""
        for i, entry in enumerate(self.entries):
            if entry.key == key:
                return i
        return -1

    def next_after(self, index: int) -> CatalogEntry:
        """Entry following ``index``, wrapping after the last one.

        An index of -1 (not found) yields the first entry.
        """
        return self.entries[(index + 1) % len(self.entries)]


def _normalize_icon(icon: str) -> str:
    return icon.strip().replace(VARIATION_SELECTOR, "")


TYPE_CATALOG = Catalog(
    "type",
    (
        CatalogEntry("plain-note", "Obsidian Note", "📄"),
        CatalogEntry("web-page", "Web Page", "🌐"),
        CatalogEntry("video", "Video", "🎥"),
        CatalogEntry("course", "Course", "🎓"),
        CatalogEntry("textbook", "Textbook", "📚"),
        CatalogEntry("repository", "Repository", "💻"),
        CatalogEntry("other", "Other", "📦"),
    ),
)

STATUS_CATALOG = Catalog(
    "status",
    (
        CatalogEntry("saved", "Saved/Unprocessed", "📥"),
        CatalogEntry("skimmed", "Skimmed", "🔍"),
        CatalogEntry("in-progress", "In Progress", "🔄"),
        CatalogEntry("to-review", "To Review", "⏳"),
        CatalogEntry("completed", "Completed", "✅"),
        CatalogEntry("maybe-useful", "Maybe Useful", "🤔"),
        CatalogEntry("needs-review", "Needs Review", "❗"),
    ),
)
