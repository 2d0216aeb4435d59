"""Capability sets and stored permissions"""

from siteedit.domain.capabilities import DEFAULT_MAX_EDITS_PER_DAY, Capabilities


def test_magic_link_defaults():
    caps = Capabilities.from_permissions(None)
    assert caps.can_edit_text and caps.can_edit_colors
    assert not (caps.can_edit_images or caps.can_add_sections or caps.can_remove_sections)
    assert not caps.requires_approval
    assert caps.max_edits_per_day == DEFAULT_MAX_EDITS_PER_DAY
    assert caps.allowed_pages == frozenset()


def test_overlay_only_changes_given_flags():
    caps = Capabilities().overlay({"canAddSections": True, "canEditText": None, "allowedPages": ["p1"]})
    assert caps.can_add_sections
    assert caps.can_edit_text
    assert caps.allowed_pages == frozenset({"p1"})


def test_permissions_round_trip():
    caps = Capabilities(can_edit_images=True, requires_approval=True, max_edits_per_day=3)
    assert Capabilities.from_permissions(caps.to_permissions()) == caps


def test_owner_capabilities():
    caps = Capabilities.owner()
    assert caps.can_edit_images and caps.can_add_sections and caps.can_remove_sections
    assert caps.max_edits_per_day is None
    assert caps.to_permissions()["maxEditsPerDay"] is None
