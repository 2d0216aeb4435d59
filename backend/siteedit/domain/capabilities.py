# siteedit/domain/capabilities.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Optional

DEFAULT_MAX_EDITS_PER_DAY = 50

# Wire name -> attribute name
_FLAGS = {
    "canEditText": "can_edit_text",
    "canEditColors": "can_edit_colors",
    "canEditImages": "can_edit_images",
    "canAddSections": "can_add_sections",
    "canRemoveSections": "can_remove_sections",
    "requiresApproval": "requires_approval",
}


@dataclass(frozen=True)
class Capabilities:
    """Permissions granted to one requester (site owner or magic link)."""
    can_edit_text: bool = True
    can_edit_colors: bool = True
    can_edit_images: bool = False
    can_add_sections: bool = False
    can_remove_sections: bool = False
    requires_approval: bool = False
    allowed_pages: FrozenSet[str] = field(default_factory=frozenset)
    max_edits_per_day: Optional[int] = DEFAULT_MAX_EDITS_PER_DAY

    @classmethod
    def owner(cls) -> "Capabilities":
        return cls(
            can_edit_text=True,
            can_edit_colors=True,
            can_edit_images=True,
            can_add_sections=True,
            can_remove_sections=True,
            requires_approval=False,
            allowed_pages=frozenset(),
            max_edits_per_day=None,
        )

    @classmethod
    def from_permissions(cls, permissions: Optional[Dict[str, Any]]) -> "Capabilities":
        """Overlay stored camelCase permissions onto the magic link defaults."""
        return cls().overlay(permissions or {})

    def overlay(self, overrides: Dict[str, Any]) -> "Capabilities":
        changes: Dict[str, Any] = {}
        for wire, attr in _FLAGS.items():
            if overrides.get(wire) is not None:
                changes[attr] = bool(overrides[wire])
        if overrides.get("allowedPages") is not None:
            changes["allowed_pages"] = frozenset(str(p) for p in overrides["allowedPages"])
        if "maxEditsPerDay" in overrides:
            changes["max_edits_per_day"] = overrides["maxEditsPerDay"]
        return replace(self, **changes)

    def to_permissions(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {wire: getattr(self, attr) for wire, attr in _FLAGS.items()}
        data["allowedPages"] = sorted(self.allowed_pages)
        data["maxEditsPerDay"] = self.max_edits_per_day
        return data
