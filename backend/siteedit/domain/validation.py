# siteedit/domain/validation.py
from typing import Any, Dict, List

from .operations import (
    AddSectionOp,
    Operation,
    RemoveItemOp,
    RemoveSectionOp,
    ReorderOp,
    max_risk,
)
from .schemas import is_known_component

DESTRUCTIVE_WARNING_THRESHOLD = 2


def validate_operations(operations: List[Operation], risk_level: str) -> Dict[str, Any]:
    """
    Flag proposals a human should double-check before applying.

    Warnings never block anything; `valid` stays True.
    """
    warnings: List[str] = []

    destructive = [
        op for op in operations
        if isinstance(op, (RemoveSectionOp, RemoveItemOp))
    ]
    if len(destructive) > DESTRUCTIVE_WARNING_THRESHOLD and risk_level != "high":
        warnings.append(
            f"This operation removes {len(destructive)} items. Please confirm."
        )

    if any(
        isinstance(op, RemoveSectionOp) and op.section_index == 0 and not op.find_section
        for op in operations
    ):
        warnings.append("This will remove the hero section. Please confirm.")

    for op in operations:
        if isinstance(op, AddSectionOp) and not is_known_component(op.component_type):
            warnings.append(f"Unknown section type '{op.component_type}' may not render.")

    return {"valid": True, "warnings": warnings}


def assess_risk(operations: List[Operation]) -> str:
    """Risk level implied by the shape of a batch alone."""
    removals = sum(1 for op in operations if isinstance(op, RemoveSectionOp))
    if removals > 1:
        return "high"
    if removals or any(isinstance(op, (AddSectionOp, ReorderOp)) for op in operations):
        return "medium"
    return "low"


def effective_risk(declared: str, operations: List[Operation]) -> str:
    return max_risk(declared, assess_risk(operations))
