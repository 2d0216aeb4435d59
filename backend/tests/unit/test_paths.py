"""Field path parsing and traversal"""

import pytest

from siteedit.domain.paths import FieldPath, Index, InvalidPath, Key, walk


def test_parse_with_props_prefix():
    """Wire paths rooted at props parse into key and index steps."""
    path = FieldPath.parse("props.features[0].title")
    assert path.steps == (Key("features"), Index(0), Key("title"))


def test_parse_without_prefix_is_rooted_under_props():
    """A bare path is accepted and renders with the props prefix."""
    path = FieldPath.parse("headline")
    assert path.steps == (Key("headline"),)
    assert str(path) == "props.headline"


def test_str_renders_wire_form():
    assert str(FieldPath.parse("props.features[1].title")) == "props.features[1].title"


@pytest.mark.parametrize("raw", ["", "   ", "props", "props.", "props.[0]", "props.a b", "props.items[-1]", "props..x"])
def test_invalid_paths_rejected(raw):
    """Malformed paths fail at construction, never at apply time."""
    with pytest.raises(InvalidPath):
        FieldPath.parse(raw)


def test_path_must_start_with_field_name():
    with pytest.raises(InvalidPath):
        FieldPath((Index(0),))


def test_parent_leaf_and_field_name():
    path = FieldPath.parse("props.features[2]")
    assert path.parent == (Key("features"),)
    assert path.leaf == Index(2)
    assert path.field_name == "features"


def test_child_appends_key():
    assert str(FieldPath.parse("props.stats").child("label")) == "props.stats.label"


def test_walk_follows_keys_and_indexes():
    props = {"features": [{"title": "A"}, {"title": "B"}]}
    assert walk(props, FieldPath.parse("features[1].title").steps) == "B"


def test_walk_missing_step_raises_lookup_error():
    props = {"features": [{"title": "A"}]}
    with pytest.raises(LookupError):
        walk(props, FieldPath.parse("features[3].title").steps)
    with pytest.raises(LookupError):
        walk(props, FieldPath.parse("headline").steps)
