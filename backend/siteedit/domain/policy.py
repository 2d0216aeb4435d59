# siteedit/domain/policy.py
"""
Capability gate.

Each check is an independent predicate returning the list of violated
rules (empty when it passes); `authorize` ANDs them together and keeps
every reason so callers can show a complete explanation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from siteedit.errors import ResolutionError
from .applier import apply_operations
from .capabilities import Capabilities
from .document import Document
from .operations import (
    AddItemOp,
    AddSectionOp,
    Operation,
    RemoveItemOp,
    RemoveSectionOp,
    UpdateItemOp,
    UpdateOp,
)
from .schemas import COLOR, IMAGE, TEXT, classify_field

_KIND_RULES = {
    TEXT: ("can_edit_text", "editing text is not allowed"),
    COLOR: ("can_edit_colors", "editing colors is not allowed"),
    IMAGE: ("can_edit_images", "editing images is not allowed"),
}

RISK_APPROVAL_REASON = "This change requires approval from the site owner"
PROPOSAL_REQUIRED_REASON = "This link must propose an edit before applying it"


@dataclass(frozen=True)
class Decision:
    reasons: List[str] = field(default_factory=list)

    @property
    def allowed(self) -> bool:
        return not self.reasons


def _component_type(op, document: Optional[Document]) -> str:
    if getattr(op, "find_section", None):
        return op.find_section
    index = getattr(op, "section_index", None)
    if document is not None and index is not None and 0 <= index < len(document):
        return document.sections[index].component_type
    return ""


def _kinds(op: Operation, component: str) -> Set[str]:
    if isinstance(op, UpdateOp):
        return classify_field(component, op.path.field_name, op.value)
    if isinstance(op, UpdateItemOp):
        return classify_field(component, op.field, op.value)
    if isinstance(op, AddItemOp):
        return classify_field(component, op.path.field_name, op.value)
    if isinstance(op, RemoveItemOp):
        return {TEXT}
    return set()


def edit_kinds(op: Operation, document: Optional[Document] = None) -> Set[str]:
    """Edit kinds (text/color/image) an operation touches."""
    return _kinds(op, _component_type(op, document))


def targeted_components(operations: Iterable[Operation], document: Optional[Document]) -> List[str]:
    """
    Component type each operation targets ("" when unknown).

    Indexes are resolved against the document as the earlier operations
    of the batch leave it, so a later op addressing a section shifted by
    add_section or reorder is matched to the section it actually lands on.
    """
    components: List[str] = []
    for op in operations:
        components.append(_component_type(op, document))
        document = _advance(document, op)
    return components


def _advance(document: Optional[Document], op: Operation) -> Optional[Document]:
    if document is None:
        return None
    try:
        return apply_operations(document, [op])
    except ResolutionError:
        # the applier reports it
        return document


def check_operations(
    capabilities: Capabilities,
    operations: Iterable[Operation],
    document: Optional[Document] = None,
) -> List[str]:
    operations = list(operations)
    reasons: List[str] = []

    for index, (op, component) in enumerate(zip(operations, targeted_components(operations, document))):
        prefix = f"Operation {index} ({op.type})"

        if isinstance(op, AddSectionOp):
            if not capabilities.can_add_sections:
                reasons.append(f"{prefix}: adding sections is not allowed")
            continue

        if isinstance(op, RemoveSectionOp):
            if not capabilities.can_remove_sections:
                reasons.append(f"{prefix}: removing sections is not allowed")
            continue

        for kind in sorted(_kinds(op, component)):
            attr, message = _KIND_RULES[kind]
            if not getattr(capabilities, attr):
                reasons.append(f"{prefix}: {message}")

    return reasons


def check_risk(capabilities: Capabilities, risk_level: str) -> List[str]:
    if risk_level == "high" and capabilities.requires_approval:
        return [RISK_APPROVAL_REASON]
    return []


def check_page(capabilities: Capabilities, page_id: Optional[str]) -> List[str]:
    if capabilities.allowed_pages and page_id is not None:
        if str(page_id) not in capabilities.allowed_pages:
            return ["This link is not allowed to edit this page"]
    return []


def check_quota(capabilities: Capabilities, edits_in_window: int) -> List[str]:
    limit = capabilities.max_edits_per_day
    if limit is not None and edits_in_window >= limit:
        return [f"Daily edit limit reached ({limit} edits per 24 hours)"]
    return []


def authorize(
    capabilities: Capabilities,
    operations: Iterable[Operation],
    risk_level: str,
    *,
    page_id: Optional[str] = None,
    edits_in_window: int = 0,
    document: Optional[Document] = None,
) -> Decision:
    operations = list(operations)
    reasons = (
        check_page(capabilities, page_id)
        + check_quota(capabilities, edits_in_window)
        + check_operations(capabilities, operations, document)
        + check_risk(capabilities, risk_level)
    )
    return Decision(reasons=reasons)


def is_risk_veto_only(decision: Decision) -> bool:
    """True when the only thing blocking a batch is the approval requirement."""
    return decision.reasons == [RISK_APPROVAL_REASON]
