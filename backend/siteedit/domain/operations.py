# siteedit/domain/operations.py
"""
The closed operation language emitted by the Interpreter.

Operations use the Interpreter's camelCase wire names (``sectionIndex``,
``findSection``, ``itemIndex`` ...) and are discriminated on ``type``.
Paths are parsed into `FieldPath` at construction, so a malformed path is
a validation error rather than an apply-time failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_serializer,
    field_validator,
    model_validator,
)

from .paths import FieldPath

RiskLevel = Literal["low", "medium", "high"]
RISK_ORDER = {"low": 0, "medium": 1, "high": 2}


@dataclass(frozen=True)
class IndexRef:
    index: int


@dataclass(frozen=True)
class ComponentRef:
    component_type: str


SectionRef = Union[IndexRef, ComponentRef]


class _Operation(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        # `value` may legitimately be null; only optional addressing is dropped
        for key in ("sectionIndex", "findSection", "position"):
            if key in data and data[key] is None:
                del data[key]
        return data


class _Targeted(_Operation):
    """Operation addressed at one section, by index or by component type."""
    section_index: Optional[int] = Field(default=None, alias="sectionIndex")
    find_section: Optional[str] = Field(default=None, alias="findSection")

    @model_validator(mode="after")
    def _require_ref(self):
        if self.section_index is None and not self.find_section:
            raise ValueError("sectionIndex or findSection is required")
        return self

    @property
    def section_ref(self) -> SectionRef:
        # findSection wins when both are given
        if self.find_section:
            return ComponentRef(self.find_section)
        return IndexRef(self.section_index)


class _PathTargeted(_Targeted):
    path: FieldPath

    @field_validator("path", mode="before")
    @classmethod
    def _parse_path(cls, value):
        if isinstance(value, FieldPath):
            return value
        return FieldPath.parse(value)

    @field_serializer("path")
    def _dump_path(self, path: FieldPath) -> str:
        return str(path)


class UpdateOp(_PathTargeted):
    type: Literal["update"] = "update"
    value: Any


class AddSectionOp(_Operation):
    type: Literal["add_section"] = "add_section"
    position: Optional[int] = None
    component_type: str = Field(
        alias="componentType",
        validation_alias=AliasChoices("componentType", "componentId"),
        min_length=1,
    )
    props: Dict[str, Any] = Field(default_factory=dict)


class RemoveSectionOp(_Targeted):
    type: Literal["remove_section"] = "remove_section"


class ReorderOp(_Operation):
    type: Literal["reorder"] = "reorder"
    from_index: int = Field(alias="fromIndex")
    to_index: int = Field(alias="toIndex")


class AddItemOp(_PathTargeted):
    type: Literal["add_item"] = "add_item"
    value: Any


class RemoveItemOp(_PathTargeted):
    type: Literal["remove_item"] = "remove_item"
    item_index: int = Field(alias="itemIndex")


class UpdateItemOp(_PathTargeted):
    type: Literal["update_item"] = "update_item"
    item_index: int = Field(alias="itemIndex")
    field: str = Field(min_length=1)
    value: Any


Operation = Annotated[
    Union[
        UpdateOp,
        AddSectionOp,
        RemoveSectionOp,
        ReorderOp,
        AddItemOp,
        RemoveItemOp,
        UpdateItemOp,
    ],
    Field(discriminator="type"),
]

_operation_list = TypeAdapter(List[Operation])


def parse_operations(raw: Any) -> List[Operation]:
    """Validate a wire list of operations (raises pydantic.ValidationError)."""
    return _operation_list.validate_python(raw)


def dump_operations(operations: List[Operation]) -> List[Dict[str, Any]]:
    return [op.to_wire() for op in operations]


class EditProposal(BaseModel):
    """The Interpreter's answer to one free-text request."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    understood: bool
    interpretation: str = ""
    operations: List[Operation] = Field(default_factory=list)
    risk_level: RiskLevel = Field(default="low", alias="riskLevel")
    summary: str = ""

    @field_validator("risk_level", mode="before")
    @classmethod
    def _normalize_risk(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_wire(self) -> Dict[str, Any]:
        return {
            "understood": self.understood,
            "interpretation": self.interpretation,
            "operations": dump_operations(self.operations),
            "riskLevel": self.risk_level,
            "summary": self.summary,
        }


def max_risk(*levels: str) -> str:
    return max(levels, key=lambda level: RISK_ORDER[level])
