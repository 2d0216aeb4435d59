from .exceptions import InvariantViolation

def assert_section(section):
    if not section.id:
        raise InvariantViolation("Section must have an id.")

    if not section.component_type:
        raise InvariantViolation(
            f"Section {section.id} must have a componentType."
        )

    if not isinstance(section.props, dict):
        raise InvariantViolation(
            f"Section {section.id} props must be an object."
        )
