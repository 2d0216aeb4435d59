# siteedit/domain/applier.py
"""
Deterministic application of an operation batch to a content document.

`apply_operations` never mutates its input: it deep-copies the sections
into a working list, runs every operation in order against that list and
only then builds the resulting Document. Any failure raises before a
result exists, so a batch is all-or-nothing.
"""
from __future__ import annotations

import copy
import uuid
from typing import Any, Callable, Iterable, List, Optional, Set

from siteedit.errors import PathNotFound, ResolutionError
from .document import Document, Section, renumber
from .invariants.document import assert_document
from .operations import (
    AddItemOp,
    AddSectionOp,
    IndexRef,
    Operation,
    RemoveItemOp,
    RemoveSectionOp,
    ReorderOp,
    UpdateItemOp,
    UpdateOp,
    _Targeted,
)
from .paths import FieldPath, Key, walk

FIRST_MATCH = "first"
REJECT_AMBIGUOUS = "reject"


def generate_section_id() -> str:
    return f"section-{uuid.uuid4().hex[:12]}"


class _Batch:
    """Working state for one apply call."""

    def __init__(
        self,
        document: Document,
        new_id: Callable[[], str],
        ambiguity: str,
    ):
        self.sections: List[Section] = [
            Section(s.id, s.component_type, s.order, copy.deepcopy(s.props))
            for s in document.sections
        ]
        self.seen_ids: Set[str] = {s.id for s in document.sections}
        self.new_id = new_id
        self.ambiguity = ambiguity

    # -------------------------------------------------
    # Resolution
    # -------------------------------------------------
    def resolve(self, op: _Targeted) -> int:
        ref = op.section_ref

        if isinstance(ref, IndexRef):
            if not 0 <= ref.index < len(self.sections):
                raise ResolutionError(
                    f"Section index {ref.index} is out of range "
                    f"(page has {len(self.sections)} sections)"
                )
            return ref.index

        matches = [
            i for i, s in enumerate(self.sections)
            if s.component_type == ref.component_type
        ]
        if not matches:
            raise ResolutionError(f"No '{ref.component_type}' section on this page")
        if len(matches) > 1 and self.ambiguity == REJECT_AMBIGUOUS:
            raise ResolutionError(
                f"'{ref.component_type}' matches {len(matches)} sections; "
                "use sectionIndex instead"
            )
        return matches[0]

    def container(self, section: Section, steps) -> Any:
        try:
            return walk(section.props, steps)
        except LookupError as exc:
            raise PathNotFound(
                f"Path {_render(steps)} does not exist in '{section.component_type}' section"
            ) from exc

    def target_list(self, section: Section, path: FieldPath) -> list:
        target = self.container(section, path.steps)
        if not isinstance(target, list):
            raise ResolutionError(f"{path} is not a list")
        return target

    def fresh_id(self) -> str:
        candidate = self.new_id()
        while candidate in self.seen_ids:
            candidate = self.new_id()
        self.seen_ids.add(candidate)
        return candidate

    # -------------------------------------------------
    # Operations
    # -------------------------------------------------
    def update(self, op: UpdateOp) -> None:
        section = self.sections[self.resolve(op)]
        parent = self.container(section, op.path.parent)
        leaf = op.path.leaf

        if isinstance(leaf, Key):
            if not isinstance(parent, dict):
                raise ResolutionError(f"Cannot set field '{leaf}' on a non-object")
            parent[leaf.name] = copy.deepcopy(op.value)
            return

        if not isinstance(parent, list) or not 0 <= leaf.position < len(parent):
            raise ResolutionError(f"Index {leaf} is out of range for {op.path}")
        parent[leaf.position] = copy.deepcopy(op.value)

    def add_section(self, op: AddSectionOp) -> None:
        count = len(self.sections)
        position = count if op.position is None else max(0, min(op.position, count))
        section = Section(
            id=self.fresh_id(),
            component_type=op.component_type,
            order=position,
            props=copy.deepcopy(op.props),
        )
        self.sections.insert(position, section)

    def remove_section(self, op: RemoveSectionOp) -> None:
        del self.sections[self.resolve(op)]

    def reorder(self, op: ReorderOp) -> None:
        count = len(self.sections)
        for name, value in (("fromIndex", op.from_index), ("toIndex", op.to_index)):
            if not 0 <= value < count:
                raise ResolutionError(
                    f"{name} {value} is out of range (page has {count} sections)"
                )
        moved = self.sections.pop(op.from_index)
        self.sections.insert(op.to_index, moved)

    def add_item(self, op: AddItemOp) -> None:
        section = self.sections[self.resolve(op)]
        self.target_list(section, op.path).append(copy.deepcopy(op.value))

    def remove_item(self, op: RemoveItemOp) -> None:
        section = self.sections[self.resolve(op)]
        items = self.target_list(section, op.path)
        if not 0 <= op.item_index < len(items):
            raise ResolutionError(
                f"Item {op.item_index} is out of range for {op.path} "
                f"({len(items)} items)"
            )
        del items[op.item_index]

    def update_item(self, op: UpdateItemOp) -> None:
        section = self.sections[self.resolve(op)]
        items = self.target_list(section, op.path)
        if not 0 <= op.item_index < len(items):
            raise ResolutionError(
                f"Item {op.item_index} is out of range for {op.path} "
                f"({len(items)} items)"
            )
        item = items[op.item_index]
        if not isinstance(item, dict):
            raise ResolutionError(f"Item {op.item_index} of {op.path} is not an object")
        item[op.field] = copy.deepcopy(op.value)

    def run(self, op: Operation) -> None:
        getattr(self, op.type)(op)
        self.sections = list(renumber(self.sections))


def apply_operations(
    document: Document,
    operations: Iterable[Operation],
    *,
    new_id: Optional[Callable[[], str]] = None,
    ambiguity: str = FIRST_MATCH,
) -> Document:
    """
    Apply `operations` in order and return the new document.

    Raises ResolutionError (tagged with the failing operation's index) when
    a section reference, path or item index cannot be resolved; the input
    document is never modified.
    """
    batch = _Batch(document, new_id or generate_section_id, ambiguity)

    for index, op in enumerate(operations):
        try:
            batch.run(op)
        except ResolutionError as exc:
            raise exc.at(index) from exc

    result = Document(
        sections=renumber(batch.sections),
        extras=copy.deepcopy(document.extras),
    )
    assert_document(result)
    return result


def _render(steps) -> str:
    return str(FieldPath(tuple(steps))) if steps else "props"
