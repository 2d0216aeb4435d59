# siteedit/domain/schemas.py
"""
Known section component types and the kind of each editable field.

The Interpreter is told about these component types; the capability gate
uses the field kinds to decide whether a change is a text, color or image
edit. Fields of unknown components are classified by name.
"""
import re
from typing import Any, Dict, Optional, Set

TEXT = "text"
COLOR = "color"
IMAGE = "image"
LIST = "list"

FIELD_KINDS = {TEXT, COLOR, IMAGE}

SECTION_SCHEMAS: Dict[str, Dict[str, str]] = {
    "hero-centered": {
        "headline": TEXT,
        "subheadline": TEXT,
        "ctaText": TEXT,
        "ctaLink": TEXT,
        "backgroundImage": IMAGE,
        "backgroundColor": COLOR,
    },
    "hero-split": {
        "headline": TEXT,
        "subheadline": TEXT,
        "ctaText": TEXT,
        "ctaLink": TEXT,
        "image": IMAGE,
        "imageAlt": TEXT,
    },
    "features-grid": {
        "headline": TEXT,
        "subheadline": TEXT,
        "features": LIST,
    },
    "testimonials-grid": {
        "headline": TEXT,
        "testimonials": LIST,
    },
    "stats-simple": {
        "headline": TEXT,
        "stats": LIST,
    },
    "contact-split": {
        "headline": TEXT,
        "subheadline": TEXT,
        "email": TEXT,
        "phone": TEXT,
        "address": TEXT,
    },
    "cta-centered": {
        "headline": TEXT,
        "subheadline": TEXT,
        "ctaText": TEXT,
        "ctaLink": TEXT,
    },
    "footer-simple": {
        "companyName": TEXT,
        "links": LIST,
        "copyright": TEXT,
    },
}

# "imageAlt" is alt text, not an image
_IMAGE_NAME = re.compile(r"(image|img|photo|picture|logo|avatar|icon|src)(?!alt)", re.I)
_COLOR_NAME = re.compile(r"(color|colour|background$|bg|theme|palette|accent|gradient)", re.I)
_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def is_known_component(component_type: str) -> bool:
    return component_type in SECTION_SCHEMAS


def known_field(component_type: str, field_name: str) -> Optional[str]:
    return SECTION_SCHEMAS.get(component_type, {}).get(field_name)


def classify_name(field_name: str) -> str:
    lowered = field_name.lower()
    if lowered.endswith("alt"):
        return TEXT
    if _IMAGE_NAME.search(field_name):
        return IMAGE
    if _COLOR_NAME.search(field_name):
        return COLOR
    return TEXT


def classify_field(component_type: str, field_name: str, value: Any = None) -> Set[str]:
    """
    Return the edit kinds touched by writing `value` to `field_name`.

    Object values are classified key by key and list values element by
    element, so adding a testimonial with an avatar counts as both a text
    and an image edit. A hex color written anywhere also counts as a color
    edit, on top of whatever the field itself is.
    """
    if isinstance(value, dict):
        kinds: Set[str] = set()
        for key, nested in value.items():
            kinds |= classify_field(component_type, key, nested)
        return kinds or {TEXT}

    if isinstance(value, list):
        kinds = set()
        for element in value:
            kinds |= classify_field(component_type, field_name, element)
        return kinds or {TEXT}

    kind = known_field(component_type, field_name)
    kinds = {kind if kind in FIELD_KINDS else classify_name(field_name)}

    if isinstance(value, str) and _HEX_COLOR.match(value.strip()):
        kinds.add(COLOR)
    return kinds
