"""Quick edit field schemas - normalized field definitions and their read models"""

from enum import Enum
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, Field as PydanticField, field_validator

from core.settings import settings


class QuickEditFieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"


FIELD_TYPES = frozenset(field_type.value for field_type in QuickEditFieldType)


class StaticOptions(BaseModel):
    """A fixed value => label mapping"""
    kind: Literal["static"] = "static"
    choices: dict[Any, Any] = PydanticField(default_factory=dict)

    model_config = {"frozen": True}


class SupplierOptions(BaseModel):
    """A zero-argument callable returning a value => label mapping, called on every resolution"""
    kind: Literal["supplier"] = "supplier"
    supplier: Callable[[], Any]

    model_config = {"frozen": True}


class QuickEditField(BaseModel):
    """Fully defaulted configuration of one quick edit field"""
    key: str = PydanticField(..., min_length=1)
    label: str = ""
    type: QuickEditFieldType = QuickEditFieldType.TEXT
    description: str = ""
    options: StaticOptions | SupplierOptions = PydanticField(default_factory=StaticOptions)
    column: str = PydanticField(..., min_length=1)
    meta_key: str = PydanticField(..., min_length=1)

    # Number fields only
    min: int | float | None = None
    max: int | float | None = None
    step: int | float | str | None = None

    sanitize_callback: Optional[Callable[[Any], Any]] = None
    capability: str = PydanticField(default_factory=lambda: settings.QUICK_EDIT_DEFAULT_CAPABILITY)
    attrs: dict[str, Any] = PydanticField(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("step", mode="before")
    @classmethod
    def validate_step(cls, v):
        if isinstance(v, bool):
            raise ValueError("step must be a number or a numeric string")
        return v


class QuickEditFieldRead(BaseModel):
    """Schema for reading a registered field"""
    key: str
    label: str
    type: QuickEditFieldType
    description: str
    column: str
    meta_key: str
    min: int | float | None = None
    max: int | float | None = None
    step: int | float | str | None = None
    capability: str
    options: dict[str, Any] = {}


class ScriptField(BaseModel):
    """One record of the data array embedded in the populate script"""
    key: str
    column: str
    type: QuickEditFieldType


class QuickEditSaveResult(BaseModel):
    """Outcome of one save event, per field key"""
    post_id: int
    updated: list[str] = []
    deleted: list[str] = []
    rejected: list[str] = []
    failed: list[str] = []
    skipped: list[str] = []
