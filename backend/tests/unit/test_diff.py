"""Diff summaries between two documents"""

from siteedit.domain.applier import apply_operations
from siteedit.domain.diff import summarize
from siteedit.domain.document import Document
from siteedit.domain.operations import parse_operations


def _after(document, *raw):
    return apply_operations(document, parse_operations(list(raw)), new_id=lambda: "section-new")


def test_identical_documents_have_no_changes(document):
    assert summarize(document, document) == []


def test_field_change(document):
    after = _after(document, {"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "Hot rolls"})
    assert summarize(document, after) == [
        "Changed hero-centered headline from `Fresh bread daily` to `Hot rolls`"
    ]


def test_field_set_for_the_first_time(document):
    after = _after(document, {"type": "update", "sectionIndex": 2, "path": "props.phone", "value": "555"})
    assert summarize(document, after) == ["Set contact-split phone to `555`"]


def test_list_changes_are_counted(document):
    after = _after(
        document,
        {"type": "add_item", "sectionIndex": 1, "path": "props.features", "value": {"title": "New"}},
        {"type": "update_item", "sectionIndex": 1, "path": "props.features", "itemIndex": 0,
         "field": "title", "value": "Renamed"},
    )
    assert summarize(document, after) == ["Updated features-grid features (1 added, 1 changed)"]


def test_removing_first_item_does_not_count_shifted_items_as_changed(document):
    after = _after(document, {"type": "remove_item", "sectionIndex": 1, "path": "props.features", "itemIndex": 0})
    assert summarize(document, after) == ["Updated features-grid features (1 removed)"]


def test_inserting_at_front_counts_one_addition(content):
    features = content["sections"][1]["props"]["features"]
    before = Document.from_dict(content)
    content["sections"][1]["props"]["features"] = [{"title": "Vegan"}] + features
    after = Document.from_dict(content)

    assert summarize(before, after) == ["Updated features-grid features (1 added)"]


def test_added_and_removed_sections(document):
    after = _after(
        document,
        {"type": "remove_section", "sectionIndex": 2},
        {"type": "add_section", "position": 0, "componentType": "cta-centered"},
    )
    assert summarize(document, after) == [
        "Removed contact-split section (position 2)",
        "Added cta-centered section at position 0",
    ]


def test_insertion_does_not_count_as_moving_later_sections(document):
    after = _after(document, {"type": "add_section", "position": 1, "componentType": "stats-simple"})
    changes = summarize(document, after)
    assert changes == ["Added stats-simple section at position 1"]


def test_removal_does_not_count_as_moving_later_sections(document):
    after = _after(document, {"type": "remove_section", "sectionIndex": 0})
    assert summarize(document, after) == ["Removed hero-centered section (position 0)"]


def test_reorder_reports_moves(document):
    after = _after(document, {"type": "reorder", "fromIndex": 0, "toIndex": 2})
    changes = summarize(document, after)
    assert "Moved hero-centered section from position 0 to 2" in changes
    assert all(change.startswith("Moved") for change in changes)


def test_long_values_are_truncated(document):
    long_text = "x" * 200
    after = _after(document, {"type": "update", "sectionIndex": 0, "path": "props.headline", "value": long_text})
    (change,) = summarize(document, after)
    assert "x" * 200 not in change
    assert change.endswith("...`")


def test_field_set_to_null(document):
    before = document
    after = _after(document, {"type": "update", "sectionIndex": 0, "path": "props.ctaText", "value": None})
    assert summarize(before, after) == ["Changed hero-centered ctaText from `Order now` to `null`"]


def test_single_section_headline_scenario():
    before = Document.from_dict({"sections": [
        {"id": "s1", "componentType": "hero-centered", "props": {"headline": "Welcome"}},
    ]})
    after = _after(before, {"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "Welcome to Acme"})

    assert after.sections[0].props["headline"] == "Welcome to Acme"
    assert summarize(before, after) == ["Changed hero-centered headline from `Welcome` to `Welcome to Acme`"]


def test_summary_is_stable(document):
    after = _after(document, {"type": "reorder", "fromIndex": 0, "toIndex": 2})
    assert summarize(document, after) == summarize(document, after)
