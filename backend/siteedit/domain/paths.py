# siteedit/domain/paths.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Tuple, Union

ROOT_KEY = "props"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")
_SEGMENT = re.compile(r"^(?P<key>[^\[\]]+)(?P<indexes>(\[\d+\])*)$")
_INDEX = re.compile(r"\[(\d+)\]")


class InvalidPath(ValueError):
    """Raised when a field path cannot be constructed."""


@dataclass(frozen=True)
class Key:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    position: int

    def __str__(self) -> str:
        return f"[{self.position}]"


Step = Union[Key, Index]


@dataclass(frozen=True)
class FieldPath:
    """
    Typed address of a value inside a section's props.

    Steps are relative to `props`; the wire form keeps the `props.` prefix,
    e.g. ``props.features[0].title``.
    """
    steps: Tuple[Step, ...]

    def __post_init__(self):
        if not self.steps:
            raise InvalidPath("Path must name at least one field")
        if not isinstance(self.steps[0], Key):
            raise InvalidPath("Path must start with a field name")
        for step in self.steps:
            if isinstance(step, Key) and not _IDENTIFIER.match(step.name):
                raise InvalidPath(f"Invalid field name: {step.name!r}")
            if isinstance(step, Index) and step.position < 0:
                raise InvalidPath(f"Invalid array index: {step.position}")

    @classmethod
    def parse(cls, raw: str) -> "FieldPath":
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidPath("Path must be a non-empty string")

        segments = raw.strip().split(".")
        if segments[0] == ROOT_KEY:
            segments = segments[1:]

        steps: list[Step] = []
        for segment in segments:
            match = _SEGMENT.match(segment)
            if not match:
                raise InvalidPath(f"Invalid path segment {segment!r} in {raw!r}")
            steps.append(Key(match.group("key")))
            steps.extend(Index(int(i)) for i in _INDEX.findall(match.group("indexes")))

        return cls(tuple(steps))

    @property
    def parent(self) -> Tuple[Step, ...]:
        return self.steps[:-1]

    @property
    def leaf(self) -> Step:
        return self.steps[-1]

    @property
    def field_name(self) -> str:
        """Last named field on the path (array indexes skipped)."""
        for step in reversed(self.steps):
            if isinstance(step, Key):
                return step.name
        raise InvalidPath("Path has no field name")  # unreachable after __post_init__

    def child(self, name: str) -> "FieldPath":
        return FieldPath(self.steps + (Key(name),))

    def __str__(self) -> str:
        out = ROOT_KEY
        for step in self.steps:
            out += str(step) if isinstance(step, Index) else f".{step}"
        return out


def walk(container: Any, steps: Tuple[Step, ...]) -> Any:
    """
    Follow `steps` from `container`, raising LookupError when a step does
    not resolve to an existing value.
    """
    current = container
    for step in steps:
        if isinstance(step, Key):
            if not isinstance(current, dict) or step.name not in current:
                raise LookupError(step.name)
            current = current[step.name]
        else:
            if not isinstance(current, list) or not 0 <= step.position < len(current):
                raise LookupError(str(step))
            current = current[step.position]
    return current
