"""Interpreter reply parsing and the Groq client wrapper"""

from types import SimpleNamespace

import pytest

from siteedit.domain.operations import UpdateOp
from siteedit.errors import InterpreterFailed, InterpreterUnavailable
from siteedit.services.interpreter import GroqInterpreter, parse_proposal
from siteedit.services.prompts import NATURAL_LANGUAGE_EDITOR_PROMPT, build_user_prompt

REPLY = """```json
{
  "understood": true,
  "interpretation": "Change the hero headline",
  "operations": [{"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "Hot rolls"}],
  "riskLevel": "low",
  "summary": "New headline"
}
```"""


def test_parse_reply_inside_code_fence():
    proposal = parse_proposal(REPLY)
    assert proposal.understood
    assert isinstance(proposal.operations[0], UpdateOp)
    assert proposal.summary == "New headline"


def test_not_understood_reply_drops_operations():
    proposal = parse_proposal(
        '{"understood": false, "interpretation": "Which page?", '
        '"operations": [{"type": "remove_section", "sectionIndex": 0}]}'
    )
    assert not proposal.understood
    assert proposal.operations == []


def test_reply_without_json_fails():
    with pytest.raises(InterpreterFailed):
        parse_proposal("Sorry, I cannot help with that.")


def test_reply_with_broken_json_fails():
    with pytest.raises(InterpreterFailed):
        parse_proposal('{"understood": true, "operations": [}')


def test_reply_outside_operation_language_fails_whole():
    """One bad operation rejects the whole reply; nothing is partially used."""
    with pytest.raises(InterpreterFailed) as exc_info:
        parse_proposal(
            '{"understood": true, "riskLevel": "low", "operations": ['
            '{"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "ok"},'
            '{"type": "drop_table"}]}'
        )
    assert exc_info.value.extra["details"]


def _client(text):
    completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return completion

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, calls


def test_groq_interpreter_sends_prompt_and_parses_reply(app, document):
    client, calls = _client(REPLY)
    interpreter = GroqInterpreter(api_key=None, model="test-model", client=client)

    proposal = interpreter.interpret("Change the headline", document, {"siteName": "Acme", "industry": "bakery"})

    assert proposal.operations[0].value == "Hot rolls"
    assert calls[0]["model"] == "test-model"
    assert calls[0]["messages"][0]["content"] == NATURAL_LANGUAGE_EDITOR_PROMPT
    assert "Acme" in calls[0]["messages"][1]["content"]


def test_groq_interpreter_empty_reply_fails(app, document):
    client, _ = _client("")
    interpreter = GroqInterpreter(api_key=None, model="test-model", client=client)
    with pytest.raises(InterpreterFailed):
        interpreter.interpret("anything", document)


def test_unconfigured_interpreter_is_unavailable(document):
    interpreter = GroqInterpreter(api_key=None, model="test-model")
    assert not interpreter.available
    with pytest.raises(InterpreterUnavailable):
        interpreter.interpret("anything", document)


def test_user_prompt_includes_content_and_request(content):
    prompt = build_user_prompt("Make it pop", content, {"siteName": "Acme", "industry": None})
    assert '"hero-centered"' in prompt
    assert "Industry: General" in prompt
    assert '"Make it pop"' in prompt
