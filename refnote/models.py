"""Data models for reference records."""

from dataclasses import dataclass


MAX_RATING = 5


@dataclass
class ReferenceRecord:
    """A single reference as it appears under a note's References section."""

    type: str = "plain-note"
    title: str = ""
    target: str = ""  # vault-relative note path, URL, or empty
    status: str = "saved"
    rating: int = 0  # 0 = unrated, otherwise 1-5 stars

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "target": self.target,
            "status": self.status,
            "rating": self.rating,
        }


def clamp_rating(value: int) -> int:
    """Clamp a star count into the 0-5 range."""
    return max(0, min(MAX_RATING, int(value)))


@dataclass(frozen=True)
class RecordSpan:
    """Location of an encoded record inside a document's lines."""

    header_index: int
    header_line: str
    detail_line: str | None = None
