from typing import Set

from siteedit.errors import InvalidTransition

PENDING = "pending"
APPLIED = "applied"
REJECTED = "rejected"
EXPIRED = "expired"

EDIT_STATUSES = (PENDING, APPLIED, REJECTED, EXPIRED)

# Explicit allowed state transitions
ALLOWED_EDIT_TRANSITIONS: dict[str, Set[str]] = {
    PENDING: {APPLIED, REJECTED, EXPIRED},
    APPLIED: set(),
    REJECTED: set(),
    EXPIRED: set(),
}

def is_terminal(status: str) -> bool:
    return not ALLOWED_EDIT_TRANSITIONS.get(status)

def assert_edit_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards edit record lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_EDIT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvalidTransition(
            f"Illegal edit transition: {from_status} → {to_status}"
        )
