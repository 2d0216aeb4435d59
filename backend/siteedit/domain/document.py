# siteedit/domain/document.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Section:
    """
    One addressable block of a page's content tree.

    `props` is treated as read-only once a Section is built; the applier
    always works on a deep copy and constructs new Sections.
    """
    id: str
    component_type: str
    order: int
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "componentType": self.component_type,
            "order": self.order,
            "props": copy.deepcopy(self.props),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], order: int) -> "Section":
        # Older content stored the tag as "componentId"
        component_type = data.get("componentType") or data.get("componentId") or ""
        return cls(
            id=str(data["id"]),
            component_type=component_type,
            order=order,
            props=copy.deepcopy(data.get("props") or {}),
        )


@dataclass(frozen=True)
class Document:
    """Ordered sequence of sections plus the page-level extras kept verbatim."""
    sections: Tuple[Section, ...] = ()
    extras: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.sections)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data["sections"] = [s.to_dict() for s in self.sections]
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Document":
        """
        Build a Document from stored page content.

        Sections are ordered by their stored `order` when every section has
        one, otherwise by list position; order values are then renumbered
        0..n-1. Keys other than `sections` (siteInfo, branding, ...) are kept
        as extras and round-trip untouched.
        """
        data = data or {}
        raw_sections = list(data.get("sections") or [])

        if raw_sections and all(isinstance(s.get("order"), int) for s in raw_sections):
            raw_sections = sorted(
                enumerate(raw_sections),
                key=lambda pair: (pair[1]["order"], pair[0]),
            )
            raw_sections = [s for _, s in raw_sections]

        sections = tuple(
            Section.from_dict(raw, order=index)
            for index, raw in enumerate(raw_sections)
        )
        extras = {k: copy.deepcopy(v) for k, v in data.items() if k != "sections"}
        return cls(sections=sections, extras=extras)


def renumber(sections: List[Section]) -> Tuple[Section, ...]:
    """Assign contiguous zero-based order positions in sequence order."""
    return tuple(
        s if s.order == index else Section(s.id, s.component_type, index, s.props)
        for index, s in enumerate(sections)
    )
