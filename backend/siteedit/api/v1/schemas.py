# siteedit/api/v1/schemas.py
"""
Request bodies accepted by the v1 API.

Field names follow the JSON the editor frontend sends (camelCase); the
models accept either spelling.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from flask import request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from siteedit.domain.operations import Operation
from siteedit.errors import ValidationFailed

T = TypeVar("T", bound=BaseModel)


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProposeRequest(_Body):
    request: str = Field(min_length=1)
    page_id: Optional[str] = Field(default=None, alias="pageId")

    @field_validator("request")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("request must not be blank")
        return value


class ApplyRequest(_Body):
    page_id: str = Field(alias="pageId", min_length=1)
    operations: List[Operation] = Field(min_length=1)
    edit_id: Optional[str] = Field(default=None, alias="editId")
    expected_version: Optional[int] = Field(default=None, alias="expectedVersion", ge=1)


class RejectRequest(_Body):
    reason: Optional[str] = Field(default=None, max_length=500)


class PermissionOverrides(_Body):
    can_edit_text: Optional[bool] = Field(default=None, alias="canEditText")
    can_edit_colors: Optional[bool] = Field(default=None, alias="canEditColors")
    can_edit_images: Optional[bool] = Field(default=None, alias="canEditImages")
    can_add_sections: Optional[bool] = Field(default=None, alias="canAddSections")
    can_remove_sections: Optional[bool] = Field(default=None, alias="canRemoveSections")
    requires_approval: Optional[bool] = Field(default=None, alias="requiresApproval")
    allowed_pages: Optional[List[str]] = Field(default=None, alias="allowedPages")
    max_edits_per_day: Optional[int] = Field(default=None, alias="maxEditsPerDay", ge=1, le=1000)

    def to_overrides(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateMagicLinkRequest(_Body):
    name: str = Field(min_length=1, max_length=100)
    expires_in_days: Optional[int] = Field(default=None, alias="expiresInDays", ge=1, le=365)
    permissions: PermissionOverrides = Field(default_factory=PermissionOverrides)


class LoginRequest(_Body):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


def _details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors(include_url=False, include_context=False, include_input=False)
    ]


def parse_body(model: Type[T]) -> T:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationFailed("Invalid request body")

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailed("Invalid request body", details=_details(exc)) from exc
