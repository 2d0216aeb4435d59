from .section import assert_section
from .exceptions import InvariantViolation

def assert_document(document):
    sections = document.sections

    orders = [section.order for section in sections]
    expected = list(range(len(orders)))

    if orders != expected:
        raise InvariantViolation(
            f"Section orders are not contiguous starting from 0: {orders}"
        )

    ids = [section.id for section in sections]
    if len(set(ids)) != len(ids):
        raise InvariantViolation(f"Section ids are not unique: {ids}")

    for section in sections:
        assert_section(section)
