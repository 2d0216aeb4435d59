# siteedit/domain/diff.py
from __future__ import annotations

import difflib
import json
from typing import Any, Dict, List

from .document import Document, Section

MAX_VALUE_LENGTH = 60


def _fmt(value: Any) -> str:
    text = value if isinstance(value, str) else _key(value)
    if len(text) > MAX_VALUE_LENGTH:
        text = text[: MAX_VALUE_LENGTH - 3] + "..."
    return f"`{text}`"


def _key(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _ordered_keys(before: Dict[str, Any], after: Dict[str, Any]) -> List[str]:
    keys = list(before)
    keys.extend(k for k in after if k not in before)
    return keys


def _summarize_list(label: str, old: list, new: list) -> List[str]:
    """Count added/removed/changed elements after matching equal ones up."""
    matcher = difflib.SequenceMatcher(
        a=[_key(item) for item in old],
        b=[_key(item) for item in new],
        autojunk=False,
    )

    added = removed = changed = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "insert":
            added += j2 - j1
        elif tag == "delete":
            removed += i2 - i1
        elif tag == "replace":
            common = min(i2 - i1, j2 - j1)
            changed += common
            added += (j2 - j1) - common
            removed += (i2 - i1) - common

    parts = []
    if added:
        parts.append(f"{added} added")
    if removed:
        parts.append(f"{removed} removed")
    if changed:
        parts.append(f"{changed} changed")
    if not parts:
        return []
    return [f"Updated {label} ({', '.join(parts)})"]


def _summarize_props(label: str, before: Dict[str, Any], after: Dict[str, Any]) -> List[str]:
    changes: List[str] = []

    for key in _ordered_keys(before, after):
        name = f"{label} {key}"
        if key not in after:
            changes.append(f"Removed {name}")
            continue
        if key not in before:
            changes.append(f"Set {name} to {_fmt(after[key])}")
            continue

        old, new = before[key], after[key]
        if old == new:
            continue
        if isinstance(old, list) and isinstance(new, list):
            changes.extend(_summarize_list(name, old, new))
        elif isinstance(old, dict) and isinstance(new, dict):
            changes.extend(_summarize_props(name, old, new))
        else:
            changes.append(f"Changed {name} from {_fmt(old)} to {_fmt(new)}")

    return changes


def summarize(before: Document, after: Document) -> List[str]:
    """
    Describe how `after` differs from `before`, section by section.

    Output order: removals (in old order), additions (in new order), then
    per-section moves and field changes in new order. Identical documents
    yield an empty list.
    """
    before_ids = {s.id: s for s in before.sections}
    after_ids = {s.id: s for s in after.sections}

    changes: List[str] = []

    for section in before.sections:
        if section.id not in after_ids:
            changes.append(f"Removed {section.component_type} section (position {section.order})")

    for section in after.sections:
        if section.id not in before_ids:
            changes.append(f"Added {section.component_type} section at position {section.order}")

    # Moves are judged on relative order of surviving sections, so an
    # insertion above a section does not count as moving it.
    kept_before = [s.id for s in before.sections if s.id in after_ids]
    kept_after = [s.id for s in after.sections if s.id in before_ids]
    rank_before = {sid: i for i, sid in enumerate(kept_before)}

    for rank, section_id in enumerate(kept_after):
        old: Section = before_ids[section_id]
        new: Section = after_ids[section_id]

        if rank_before[section_id] != rank:
            changes.append(
                f"Moved {new.component_type} section from position {old.order} to {new.order}"
            )

        if old.component_type != new.component_type:
            changes.append(
                f"Changed section {section_id} type from {_fmt(old.component_type)} "
                f"to {_fmt(new.component_type)}"
            )

        changes.extend(_summarize_props(new.component_type, old.props, new.props))

    return changes
