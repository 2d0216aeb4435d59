# siteedit/services/prompts.py
import json
from typing import Any, Dict, Optional

from siteedit.domain.schemas import SECTION_SCHEMAS, LIST

OPERATION_EXAMPLES = [
    {"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "New Value"},
    {"type": "add_section", "position": 2, "componentType": "features-grid", "props": {}},
    {"type": "remove_section", "sectionIndex": 3},
    {"type": "reorder", "fromIndex": 1, "toIndex": 3},
    {"type": "add_item", "findSection": "features-grid", "path": "props.features",
     "value": {"title": "...", "description": "...", "icon": "star"}},
    {"type": "remove_item", "sectionIndex": 1, "path": "props.features", "itemIndex": 2},
    {"type": "update_item", "sectionIndex": 1, "path": "props.features", "itemIndex": 0,
     "field": "title", "value": "New Title"},
]


def _describe_schemas() -> str:
    lines = []
    for component_type, fields in SECTION_SCHEMAS.items():
        described = ", ".join(
            f"{name} ({'array of objects' if kind == LIST else kind})"
            for name, kind in fields.items()
        )
        lines.append(f'- "{component_type}": {described}')
    return "\n".join(lines)


NATURAL_LANGUAGE_EDITOR_PROMPT = f"""You are a website editor. You turn a plain-English request from a \
non-technical site owner into precise JSON operations over the page content.

The page is JSON: {{"sections": [{{"id": "...", "componentType": "...", "order": 0, "props": {{...}}}}]}}

Section types and their editable props:
{_describe_schemas()}

Address a section with "sectionIndex" (position in the list) or "findSection" \
(a componentType; the first matching section is used). Paths always start with "props.".

Operation shapes:
{chr(10).join(json.dumps(op) for op in OPERATION_EXAMPLES)}

Risk levels:
- "low": text changes, color tweaks, minor updates
- "medium": adding/removing/reordering sections, structural changes
- "high": removing several sections, changing core business information

Respond with ONLY a JSON object:
{{"understood": true, "interpretation": "what you understood", "operations": [...], \
"riskLevel": "low|medium|high", "summary": "human-readable summary"}}

If the request is unclear or impossible, respond with "understood": false, an empty \
"operations" list and explain why in "interpretation".
"""


def build_user_prompt(request: str, content: Dict[str, Any], site_context: Optional[Dict[str, Any]] = None) -> str:
    parts = [
        "## Current Page Structure",
        json.dumps(content, indent=2),
    ]
    if site_context:
        parts += [
            "",
            "## Site Context",
            f"- Site Name: {site_context.get('siteName') or 'Unknown'}",
            f"- Industry: {site_context.get('industry') or 'General'}",
        ]
    parts += [
        "",
        "## User Request",
        json.dumps(request),
        "",
        "Interpret this request and provide the JSON operations to fulfill it.",
    ]
    return "\n".join(parts)
