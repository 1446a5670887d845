"""Pydantic schemas for Productboard request bodies and listing results.

Request models are always built from the keys a caller actually supplied and
rendered with ``exclude_unset=True``: a field that was provided (even as
``None``) is sent, a field that was not provided is omitted.
"""
from typing import Any, Optional, Type, TypeVar, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

Number = Union[int, float]

ModelT = TypeVar("ModelT", bound=BaseModel)


# Reference Schemas

class StatusRef(BaseModel):
    """Status reference, by id or by name."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None


class EntityRef(BaseModel):
    """Reference to another Productboard entity by id."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str


class UserRef(BaseModel):
    """Reference to a Productboard user by email."""

    email: str


class CompanyRef(BaseModel):
    """Reference to a company by domain."""

    domain: str


# Timeframe and Progress Schemas

class Timeframe(BaseModel):
    """Simple start/end timeframe used by features."""

    start: Optional[Any] = None
    end: Optional[Any] = None


class DateRange(BaseModel):
    """Date-range timeframe used by objectives, initiatives, releases and key results."""

    startDate: Optional[str] = None
    endDate: Optional[str] = None
    granularity: Optional[str] = None


class Progress(BaseModel):
    """Key result progress values."""

    startValue: Optional[Number] = None
    targetValue: Optional[Number] = None
    currentValue: Optional[Number] = None
    progress: Optional[Number] = None


# Entity Schemas

class FeatureData(BaseModel):
    """Feature create/update payload (`data` member)."""

    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    status: Optional[StatusRef] = None
    parent: Optional[dict[str, EntityRef]] = None
    archived: Optional[bool] = None
    owner: Optional[UserRef] = None
    timeframe: Optional[Timeframe] = None


class NoteData(BaseModel):
    """Note create payload (sent unwrapped)."""

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[list[str]] = None
    user: Optional[UserRef] = None
    customer_email: Optional[str] = None
    company: Optional[CompanyRef] = None
    display_url: Optional[str] = None


class ReleaseData(BaseModel):
    """Release create/update payload."""

    name: Optional[str] = None
    description: Optional[str] = None
    releaseGroup: Optional[EntityRef] = None
    state: Optional[str] = None
    timeframe: Optional[DateRange] = None


class ObjectiveData(BaseModel):
    """Objective create/update payload."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[StatusRef] = None
    owner: Optional[UserRef] = None
    parent: Optional[dict[str, EntityRef]] = None
    timeframe: Optional[DateRange] = None


class InitiativeData(BaseModel):
    """Initiative create/update payload."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[StatusRef] = None
    owner: Optional[UserRef] = None
    timeframe: Optional[DateRange] = None


class KeyResultData(BaseModel):
    """Key result create/update payload."""

    name: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[UserRef] = None
    parent: Optional[dict[str, EntityRef]] = None
    timeframe: Optional[DateRange] = None
    progress: Optional[Progress] = None


class CustomFieldValueData(BaseModel):
    """Custom field value payload."""

    type: str
    value: Any = None


class AssignmentData(BaseModel):
    """Feature/release assignment payload."""

    assigned: bool


# Listing Results

class LinkPage(BaseModel):
    """Result of walking a link-paginated listing."""

    items: list[Any] = Field(default_factory=list)
    count: int = 0
    has_more: bool = False
    next: Optional[str] = None


class CursorPage(BaseModel):
    """Result of walking a cursor-paginated listing."""

    items: list[Any] = Field(default_factory=list)
    count: int = 0
    has_more: bool = False
    next_cursor: Optional[str] = None


def build(model: Type[ModelT], **fields: Any) -> ModelT:
    """Instantiate a request model, reporting type problems as ValidationError."""
    try:
        return model(**fields)
    except pydantic.ValidationError as e:
        problems = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or model.__name__
            problems.append(f"{location}: {error['msg']}")
        raise ValidationError(
            f"Invalid {model.__name__} fields: " + "; ".join(problems),
            details=problems,
        ) from e


def to_body(model: BaseModel) -> dict:
    """Render only the fields that were explicitly set."""
    return model.model_dump(exclude_unset=True)
