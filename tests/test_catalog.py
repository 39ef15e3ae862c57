from refnote.references.catalog import STATUS_CATALOG, TYPE_CATALOG


def test_catalog_order_and_size() -> None:
    assert TYPE_CATALOG.keys == ["plain-note", "web-page", "video", "course", "textbook", "repository", "other"]
    assert STATUS_CATALOG.keys == [
        "saved",
        "skimmed",
        "in-progress",
        "to-review",
        "completed",
        "maybe-useful",
        "needs-review",
    ]
    assert len(STATUS_CATALOG) == 7


def test_lookups_fall_back_to_first_entry() -> None:
    assert TYPE_CATALOG.by_key("podcast").key == "plain-note"
    assert TYPE_CATALOG.by_key(None).key == "plain-note"
    assert TYPE_CATALOG.by_icon("❓").key == "plain-note"
    assert STATUS_CATALOG.by_label("Abandoned").key == "saved"
    assert STATUS_CATALOG.find_by_label("Abandoned") is None


def test_reverse_lookups() -> None:
    assert TYPE_CATALOG.by_icon("🎥").key == "video"
    assert TYPE_CATALOG.by_icon("💻").label == "Repository"
    assert STATUS_CATALOG.by_label("In Progress").icon == "🔄"
    assert STATUS_CATALOG.by_label(" Completed ").key == "completed"


def test_icon_lookup_ignores_variation_selector() -> None:
    assert TYPE_CATALOG.by_icon("🎥\ufe0f").key == "video"
    assert STATUS_CATALOG.by_icon("❗\ufe0f").key == "needs-review"


def test_next_after_wraps() -> None:
    assert STATUS_CATALOG.next_after(STATUS_CATALOG.index_of("completed")).key == "maybe-useful"
    assert STATUS_CATALOG.next_after(STATUS_CATALOG.index_of("needs-review")).key == "saved"
    assert STATUS_CATALOG.index_of("unknown") == -1
    assert STATUS_CATALOG.next_after(-1).key == "saved"


def test_entry_display() -> None:
    assert TYPE_CATALOG.by_key("web-page").display == "🌐 Web Page"
