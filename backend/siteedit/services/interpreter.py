# siteedit/services/interpreter.py
"""
Client for the external Interpreter: free text in, EditProposal out.

The Interpreter is untrusted. Its reply is parsed through the typed
operation language, and a reply that does not validate is treated as a
failed call rather than partially used.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Protocol

from flask import current_app
from pydantic import ValidationError

from siteedit.domain.document import Document
from siteedit.domain.operations import EditProposal
from siteedit.errors import InterpreterFailed, InterpreterUnavailable
from siteedit.utils.events import log_event
from .prompts import NATURAL_LANGUAGE_EDITOR_PROMPT, build_user_prompt

EXTENSION_KEY = "siteedit.interpreter"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class Interpreter(Protocol):
    def interpret(
        self,
        request: str,
        document: Document,
        site_context: Optional[Dict[str, Any]] = None,
    ) -> EditProposal:
        ...


def parse_proposal(text: str) -> EditProposal:
    """Extract the JSON object from a model reply (code fences tolerated)."""
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise InterpreterFailed("No JSON found in interpreter response")

    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise InterpreterFailed(f"Failed to parse interpreter response: {exc}") from exc

    if isinstance(raw, dict) and raw.get("understood") is False:
        # Operations from a reply the model itself did not understand are dropped
        raw = {**raw, "operations": []}

    try:
        return EditProposal.model_validate(raw)
    except ValidationError as exc:
        raise InterpreterFailed(
            "Interpreter returned operations outside the edit language",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


class GroqInterpreter:
    """Interpreter backed by a Groq-hosted chat model."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        client=None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client
        if self._client is None and api_key:
            from groq import Groq
            self._client = Groq(api_key=api_key)

    @property
    def available(self) -> bool:
        return self._client is not None

    def interpret(self, request, document, site_context=None) -> EditProposal:
        if not self.available:
            raise InterpreterUnavailable("AI service not configured. Please set GROQ_API_KEY.")

        from groq import GroqError

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": NATURAL_LANGUAGE_EDITOR_PROMPT},
                    {"role": "user", "content": build_user_prompt(request, document.to_dict(), site_context)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except GroqError as exc:
            log_event(logging.ERROR, "interpreter_request_failed", error=str(exc))
            raise InterpreterFailed(f"AI request failed: {exc}") from exc

        text = (completion.choices[0].message.content or "").strip() if completion.choices else ""
        if not text:
            raise InterpreterFailed("No response from AI service")

        proposal = parse_proposal(text)
        log_event(
            logging.INFO,
            "interpreter_replied",
            understood=proposal.understood,
            operations=len(proposal.operations),
            risk=proposal.risk_level,
        )
        return proposal


def init_interpreter(app) -> None:
    app.extensions[EXTENSION_KEY] = GroqInterpreter(
        api_key=app.config.get("GROQ_API_KEY"),
        model=app.config["INTERPRETER_MODEL"],
        temperature=app.config["INTERPRETER_TEMPERATURE"],
        max_tokens=app.config["INTERPRETER_MAX_TOKENS"],
    )


def get_interpreter() -> Interpreter:
    return current_app.extensions[EXTENSION_KEY]
