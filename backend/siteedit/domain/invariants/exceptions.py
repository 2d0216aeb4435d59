class InvariantViolation(Exception):
    """Raised when a content document breaks a structural invariant."""
