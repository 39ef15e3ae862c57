import pytest

from refnote.models import ReferenceRecord
from refnote.references.codec import (
    advance_status,
    advance_status_entry,
    decode_record,
    encode_record,
    star_string,
)
from refnote.vault.resolver import VaultResolver


def test_encode_video_reference() -> None:
    record = ReferenceRecord(
        type="video",
        title="Intro to Rust",
        target="https://youtu.be/abc",
        status="in-progress",
        rating=3,
    )

    header, detail = encode_record(record)

    assert header == "### [Intro to Rust](https://youtu.be/abc)"
    assert detail == "🎥 Video | 🔄 **In Progress** | ★★★☆☆"


def test_decode_video_reference() -> None:
    record = decode_record(
        "### [Intro to Rust](https://youtu.be/abc)",
        "🎥 Video | 🔄 **In Progress** | ★★★☆☆",
    )

    assert record == ReferenceRecord(
        type="video",
        title="Intro to Rust",
        target="https://youtu.be/abc",
        status="in-progress",
        rating=3,
    )


@pytest.mark.parametrize(
    ("rating", "expected"),
    [
        (0, "⚪ Not Rated"),
        (1, "★☆☆☆☆"),
        (5, "★★★★★"),
        (9, "★★★★★"),
        (-2, "⚪ Not Rated"),
    ],
)
def test_star_string(rating: int, expected: str) -> None:
    assert star_string(rating) == expected


def test_encode_unrated_default_record() -> None:
    header, detail = encode_record(ReferenceRecord(title="Scratch"))

    assert header == "### Scratch"
    assert detail == "📄 Obsidian Note | 📥 **Saved/Unprocessed** | ⚪ Not Rated"


def test_encode_unknown_keys_fall_back() -> None:
    _, detail = encode_record(ReferenceRecord(type="podcast", title="x", status="abandoned"))

    assert detail.startswith("📄 Obsidian Note | 📥 **Saved/Unprocessed**")


def test_encode_existing_note_short_form(resolver: VaultResolver) -> None:
    record = ReferenceRecord(type="plain-note", title="Ownership", target="concepts/Ownership.md")

    header, _ = encode_record(record, resolver)

    assert header == "### [[concepts/Ownership]]"


def test_encode_existing_note_with_alias(resolver: VaultResolver) -> None:
    record = ReferenceRecord(type="plain-note", title="Borrowing rules", target="concepts/Ownership.md")

    header, _ = encode_record(record, resolver)

    assert header == "### [[concepts/Ownership|Borrowing rules]]"


def test_encode_missing_note_uses_markdown_link(resolver: VaultResolver) -> None:
    record = ReferenceRecord(type="plain-note", title="Ghost", target="missing/Ghost.md")

    header, _ = encode_record(record, resolver)

    assert header == "### [Ghost](missing/Ghost.md)"


def test_encode_plain_note_without_resolver_uses_markdown_link() -> None:
    record = ReferenceRecord(type="plain-note", title="Ownership", target="concepts/Ownership.md")

    header, _ = encode_record(record)

    assert header == "### [Ownership](concepts/Ownership.md)"


def test_encode_web_page_never_uses_wikilink(resolver: VaultResolver) -> None:
    record = ReferenceRecord(type="web-page", title="Ownership", target="concepts/Ownership.md")

    header, _ = encode_record(record, resolver)

    assert header == "### [Ownership](concepts/Ownership.md)"


def test_encode_always_emits_a_title(resolver: VaultResolver) -> None:
    assert encode_record(ReferenceRecord())[0] == "### Untitled"
    assert encode_record(ReferenceRecord(type="web-page", target="https://example.com"))[0] == (
        "### [https://example.com](https://example.com)"
    )
    note = ReferenceRecord(type="plain-note", target="concepts/Ownership.md")
    assert encode_record(note, resolver)[0] == "### [[concepts/Ownership]]"


def test_encode_collapses_newlines() -> None:
    header, detail = encode_record(ReferenceRecord(type="other", title="Line one\nLine two\r\n", target=""))

    assert header == "### Line one Line two"
    assert "\n" not in detail


def test_decode_wikilink_short_form() -> None:
    record = decode_record("### [[concepts/Ownership]]", "📄 Obsidian Note | 📥 **Saved/Unprocessed** | ⚪ Not Rated")

    assert record.type == "plain-note"
    assert record.title == "Ownership"
    assert record.target == "concepts/Ownership.md"
    assert record.rating == 0


def test_decode_wikilink_alias() -> None:
    record = decode_record("### [[concepts/Ownership|Borrowing rules]]")

    assert record.title == "Borrowing rules"
    assert record.target == "concepts/Ownership.md"


def test_decode_wikilink_keeps_existing_extension() -> None:
    assert decode_record("### [[notes/a.md]]").target == "notes/a.md"


def test_decode_plain_title() -> None:
    record = decode_record("###   Just a title  ")

    assert record.title == "Just a title"
    assert record.target == ""


def test_decode_target_with_parentheses() -> None:
    record = decode_record("### [Rust (lang)](https://en.wikipedia.org/wiki/Rust_(programming_language))")

    assert record.title == "Rust (lang)"
    assert record.target == "https://en.wikipedia.org/wiki/Rust_(programming_language)"


def test_decode_target_with_spaces() -> None:
    record = decode_record("### [Ghost](missing/My Ghost.md)")

    assert record.target == "missing/My Ghost.md"


def test_decode_unknown_type_icon_falls_back() -> None:
    record = decode_record("### x", "❓ Mystery | 🔄 **In Progress** | ★★☆☆☆")

    assert record.type == "plain-note"
    assert record.status == "in-progress"
    assert record.rating == 2


def test_decode_not_rated_is_zero() -> None:
    assert decode_record("### x", "🎥 Video | 🔄 **In Progress** | ⚪ Not Rated").rating == 0


def test_decode_clamps_star_count() -> None:
    assert decode_record("### x", "🎥 Video | 🔄 **In Progress** | ★★★★★★★").rating == 5


@pytest.mark.parametrize(
    ("header", "detail"),
    [
        ("", None),
        ("", ""),
        ("not a heading", "no separators here"),
        ("### [broken](", "| | |"),
        ("### [[", "**"),
    ],
)
def test_decode_never_raises(header: str, detail: str | None) -> None:
    record = decode_record(header, detail)

    assert record.type == "plain-note"
    assert record.status == "saved"
    assert record.rating == 0


def test_round_trip_for_external_references() -> None:
    originals = [
        ReferenceRecord(
            type="repository",
            title="ripgrep",
            target="https://github.com/BurntSushi/ripgrep",
            status="needs-review",
            rating=5,
        ),
        ReferenceRecord(type="textbook", title="SICP", target="", status="skimmed", rating=0),
        ReferenceRecord(
            type="course",
            title="Algorithms, Part I",
            target="https://www.coursera.org/learn/algorithms-part1",
            status="to-review",
            rating=1,
        ),
        ReferenceRecord(
            type="textbook",
            title="C++ Primer [5th ed]",
            target="https://example.com/cpp",
            status="completed",
            rating=4,
        ),
        ReferenceRecord(type="video", title="[Live] Rust Q&A", target="https://youtu.be/xyz", rating=2),
    ]
    for original in originals:
        assert decode_record(*encode_record(original)) == original


def test_round_trip_for_missing_note(resolver: VaultResolver) -> None:
    original = ReferenceRecord(
        type="plain-note",
        title="Ghost",
        target="missing/Ghost.md",
        status="maybe-useful",
        rating=2,
    )

    assert decode_record(*encode_record(original, resolver)) == original


@pytest.mark.parametrize(
    ("title", "header"),
    [
        ("Ownership", "### [[concepts/Ownership]]"),
        ("Borrowing rules", "### [[concepts/Ownership|Borrowing rules]]"),
        ("Ownership [draft]", "### [[concepts/Ownership|Ownership [draft]]]"),
    ],
)
def test_round_trip_for_existing_note(resolver: VaultResolver, title: str, header: str) -> None:
    original = ReferenceRecord(
        type="plain-note",
        title=title,
        target="concepts/Ownership.md",
        status="in-progress",
        rating=4,
    )

    encoded = encode_record(original, resolver)

    assert encoded[0] == header
    assert decode_record(*encoded) == original


def test_decode_wikilink_drops_section_anchor() -> None:
    assert decode_record("### [[concepts/Ownership#Moves]]").target == "concepts/Ownership.md"
    assert decode_record("### [[concepts/Ownership#Moves]]").title == "Ownership"

    record = decode_record("### [[concepts/Ownership#Moves|Move semantics]]")
    assert record.title == "Move semantics"
    assert record.target == "concepts/Ownership.md"


def test_advance_status_completed_to_maybe_useful() -> None:
    assert advance_status("🎥 Video | ✅ **Completed** | ★★★☆☆") == "🎥 Video | 🤔 **Maybe Useful** | ★★★☆☆"


def test_advance_status_wraps_after_last_entry() -> None:
    assert advance_status("🌐 Web Page | ❗ **Needs Review** | ★☆☆☆☆") == "🌐 Web Page | 📥 **Saved/Unprocessed** | ★☆☆☆☆"


def test_advance_status_full_cycle_restores_line() -> None:
    original = "💻 Repository | 📥 **Saved/Unprocessed** | ⚪ Not Rated"
    line = original
    seen = []
    for _ in range(7):
        line = advance_status(line)
        seen.append(line)
        assert line.startswith("💻 Repository | ")
        assert line.endswith(" | ⚪ Not Rated")

    assert line == original
    assert len(set(seen)) == 7


def test_advance_status_unknown_label_resets_to_first() -> None:
    line, status = advance_status_entry("🎥 Video | 🤷 **Whatever** | ★☆☆☆☆")

    assert line == "🎥 Video | 📥 **Saved/Unprocessed** | ★☆☆☆☆"
    assert status is not None and status.key == "saved"


def test_advance_status_rewrites_only_status_span() -> None:
    line = "🎥 Video  |  ✅ **Completed** |★★★☆☆ trailing"

    assert advance_status(line) == "🎥 Video  | 🤔 **Maybe Useful** |★★★☆☆ trailing"


def test_advance_status_without_status_field_is_noop() -> None:
    line, status = advance_status_entry("just some text | more")

    assert line == "just some text | more"
    assert status is None
