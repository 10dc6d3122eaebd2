from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from core.errors import ValidationFailed

T = TypeVar("T", bound=BaseModel)


class CamelModel(BaseModel):
    """Request body accepting camelCase keys (and snake_case for convenience)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MediaFields(CamelModel):
    """Optional attachment columns, bounded by their storage widths."""

    media_url: str | None = None
    media_type: str | None = None

    @field_validator("media_url")
    @classmethod
    def _media_url(cls, value: str | None) -> str | None:
        return check_length(value, 0, 500, "Media URL") if value else None

    @field_validator("media_type")
    @classmethod
    def _media_type(cls, value: str | None) -> str | None:
        return check_length(value, 0, 100, "Media type") if value else None


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    message: str


ValidationResult = Union[Valid[T], Invalid]


def check_length(value: str, minimum: int, maximum: int, label: str) -> str:
    """Enforce string bounds with a human readable message."""
    if len(value) < minimum:
        if minimum == 1:
            raise PydanticCustomError("too_short", f"{label} is required")
        raise PydanticCustomError(
            "too_short", f"{label} must be at least {minimum} characters"
        )
    if len(value) > maximum:
        raise PydanticCustomError(
            "too_long", f"{label} must be at most {maximum} characters"
        )
    return value


def first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    error = errors[0]
    if error["type"] == "missing" and error["loc"]:
        return f"{error['loc'][-1]} is required"
    return error["msg"]


def validate(schema: type[T], payload: Any) -> ValidationResult[T]:
    try:
        return Valid(schema.model_validate(payload))
    except ValidationError as exc:
        return Invalid(first_error_message(exc))


def body(schema: type[T]):
    """Dependency factory: parse the JSON body into ``schema`` or raise a 400."""

    async def dependency(request: Request):
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else {}
        except ValueError:
            raise ValidationFailed("Request body must be valid JSON")

        result = validate(schema, payload)
        if isinstance(result, Invalid):
            raise ValidationFailed(result.message)
        return result.value

    return dependency
