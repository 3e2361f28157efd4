from __future__ import annotations

import logging
import re
from typing import Annotated, Any, Callable, Iterable, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    create_model,
)
from pydantic_core import PydanticCustomError

from booking_form.application.dto.validation_schema import ValidationSchema
from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.domain.entities.event_definition import BookingField, EventDefinition, FieldKind
from booking_form.domain.entities.view_mode import ViewMode

logger = logging.getLogger(__name__)

_PHONE_RE = re.compile(r"^\+?[0-9 ()\-.]+$")
_URL_ADAPTER = TypeAdapter(HttpUrl)


class NameParts(BaseModel):
    model_config = ConfigDict(extra="allow")

    firstName: Annotated[str, StringConstraints(min_length=1)]
    lastName: str | None = None


class LocationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: Annotated[str, StringConstraints(min_length=1)]
    optionValue: str | None = None


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _not_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("required", "This field is required")
    return value


def _check_name(value: str | NameParts) -> str | NameParts:
    if isinstance(value, str):
        return _not_blank(value)
    if not value.firstName.strip():
        raise PydanticCustomError("required", "First name is required")
    return value


def _check_phone(value: str) -> str:
    digits = re.sub(r"\D", "", value)
    if not _PHONE_RE.match(value) or not 7 <= len(digits) <= 15:
        raise PydanticCustomError("invalid_number", "Invalid phone number")
    return value


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_validation_error", "Please enter a valid URL")
    return value


def _must_be_true(value: bool) -> bool:
    if not value:
        raise PydanticCustomError("required", "This field is required")
    return value


def _text(field: BookingField, required: bool) -> Any:
    min_length = max(field.min_length or 0, 1 if required else 0) or None
    inner = Annotated[str, StringConstraints(min_length=min_length, max_length=field.max_length)]
    return Annotated[inner, AfterValidator(_not_blank)] if required else inner


def _choice(field: BookingField) -> Any:
    values = field.option_values
    return Literal[values] if values else str


def _single_choice(field: BookingField, required: bool) -> Any:
    choice = _choice(field)
    if choice is str and required:
        return Annotated[str, AfterValidator(_not_blank)]
    return choice


def _multi_choice(field: BookingField, required: bool) -> Any:
    inner = list[_choice(field)]
    return Annotated[inner, Field(min_length=1)] if required else inner


def _multi_email(field: BookingField, required: bool) -> Any:
    return Annotated[list[EmailStr], Field(min_length=1)] if required else list[EmailStr]


def _boolean(field: BookingField, required: bool) -> Any:
    return Annotated[bool, AfterValidator(_must_be_true)] if required else bool


# One rule per field kind: (field, required) -> pydantic annotation.
FIELD_RULES: dict[FieldKind, Callable[[BookingField, bool], Any]] = {
    FieldKind.name: lambda f, required: Annotated[str | NameParts, AfterValidator(_check_name)],
    FieldKind.email: lambda f, required: EmailStr,
    FieldKind.phone: lambda f, required: Annotated[str, AfterValidator(_check_phone)],
    FieldKind.address: _text,
    FieldKind.text: _text,
    FieldKind.textarea: _text,
    FieldKind.number: lambda f, required: int | float,
    FieldKind.url: lambda f, required: Annotated[str, AfterValidator(_check_url)],
    FieldKind.select: _single_choice,
    FieldKind.radio: _single_choice,
    FieldKind.multiselect: _multi_choice,
    FieldKind.checkbox: _multi_choice,
    FieldKind.boolean: _boolean,
    FieldKind.multiemail: _multi_email,
    FieldKind.radio_input: lambda f, required: LocationResponse,
}


def _field_definition(field: BookingField, view: ViewMode) -> tuple[Any, Any]:
    required = field.is_required_in(view)
    annotation = FIELD_RULES[field.kind](field, required)
    if required:
        return annotation, Field(alias=field.name)
    return Annotated[Optional[annotation], BeforeValidator(_blank_to_none)], Field(default=None, alias=field.name)


def build_responses_schema(
    event: EventDefinition | None,
    view: ViewMode,
    field_checks: Iterable[FieldCheckPort] = (),
) -> ValidationSchema:
    """
    Build the validation schema of the `responses` payload for an event and view.

    Without an event the placeholder schema is returned: it accepts anything,
    so the form can be built before the event definition has loaded. Fields
    outside the current view are left undeclared and pass through unchecked,
    as do unknown keys.
    """
    if event is None:
        return ValidationSchema(view=view)

    fields = event.fields_for(view)
    definitions = {
        f"field_{index}": _field_definition(field, view)
        for index, field in enumerate(fields)
    }
    model = create_model(
        "BookingResponses",
        __config__=ConfigDict(extra="allow"),
        **definitions,
    )

    checks = tuple(field_checks)
    bound_checks = tuple(
        (field, check)
        for field in fields
        for check in checks
        if check.applies_to(field)
    )

    logger.debug(
        "Responses schema built",
        extra={"event_slug": event.slug, "view": view.value},
    )
    return ValidationSchema(view=view, model=model, checks=bound_checks, event_slug=event.slug)
