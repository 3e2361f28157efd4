from __future__ import annotations

import asyncio
from typing import Any

import pytest

from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.application.ports.initial_values import InitialValuesPort
from booking_form.domain.entities.event_definition import BookingField, EventDefinition, FieldKind, FieldOption
from booking_form.domain.entities.form_values import FormValues, InitialValueBundle
from booking_form.domain.entities.view_mode import ReschedulingContext, ViewMode
from booking_form.infrastructure.i18n.static_translator import StaticTranslator


class FakeInitialValues(InitialValuesPort):
    def __init__(self, values: FormValues | None = None, key: str = "initial") -> None:
        self.values = values or FormValues(responses={})
        self.key = key
        self.calls: list[tuple[EventDefinition | None, ReschedulingContext]] = []

    def resolve(self, event, rescheduling):
        self.calls.append((event, rescheduling))
        return InitialValueBundle(initial_values=self.values, key=self.key)


class GatedCheck(FieldCheckPort):
    """Email check whose answer for a given value can be held back until released."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.rejected: set[str] = set()
        self.seen: list[Any] = []

    def applies_to(self, field: BookingField) -> bool:
        return field.kind == FieldKind.email

    async def check(self, field: BookingField, value: Any) -> str | None:
        self.seen.append(value)
        gate = self.gates.get(value)
        if gate is not None:
            await gate.wait()
        return "Email already booked" if value in self.rejected else None


@pytest.fixture
def email_event() -> EventDefinition:
    return EventDefinition(
        id=1,
        slug="30min",
        fields=(BookingField(name="email", kind=FieldKind.email, required=True),),
    )


@pytest.fixture
def booking_event() -> EventDefinition:
    return EventDefinition(
        id=2,
        slug="consultation",
        fields=(
            BookingField(name="name", kind=FieldKind.name, required=True),
            BookingField(name="email", kind=FieldKind.email, required=True),
            BookingField(name="phone", kind=FieldKind.phone),
            BookingField(name="notes", kind=FieldKind.textarea, max_length=20),
            BookingField(name="guests", kind=FieldKind.multiemail),
            BookingField(
                name="topic",
                kind=FieldKind.select,
                options=(FieldOption("billing"), FieldOption("support")),
            ),
            BookingField(name="terms", kind=FieldKind.boolean, required=True),
            BookingField(name="internalRef", kind=FieldKind.text, required=True, hidden=True),
            BookingField(
                name="rescheduleReason",
                kind=FieldKind.textarea,
                required=True,
                views=(ViewMode.reschedule,),
            ),
        ),
    )


@pytest.fixture
def valid_booking_responses() -> dict[str, Any]:
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "terms": True,
    }


@pytest.fixture
def initial_values() -> FakeInitialValues:
    return FakeInitialValues()


@pytest.fixture
def translator() -> StaticTranslator:
    return StaticTranslator(locale="en")


@pytest.fixture
def rescheduling() -> ReschedulingContext:
    return ReschedulingContext(reschedule_uid="uid-123", booking_data={"id": 77})
