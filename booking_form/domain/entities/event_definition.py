from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from booking_form.domain.entities.view_mode import ViewMode


class FieldKind(str, Enum):
    name = "name"
    email = "email"
    phone = "phone"
    address = "address"
    text = "text"
    textarea = "textarea"
    number = "number"
    url = "url"
    select = "select"
    multiselect = "multiselect"
    checkbox = "checkbox"
    radio = "radio"
    boolean = "boolean"
    multiemail = "multiemail"
    radio_input = "radioInput"  # location choice


@dataclass(frozen=True)
class FieldOption:
    value: str
    label: str | None = None


@dataclass(frozen=True)
class BookingField:
    name: str
    kind: FieldKind
    required: bool = False
    hidden: bool = False
    options: tuple[FieldOption, ...] = ()
    min_length: int | None = None
    max_length: int | None = None
    views: tuple[ViewMode, ...] | None = None  # None -> part of every view

    def applies_to(self, view: ViewMode) -> bool:
        return self.views is None or view in self.views

    def is_required_in(self, view: ViewMode) -> bool:
        return self.required and not self.hidden and self.applies_to(view)

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(opt.value for opt in self.options)


@dataclass(frozen=True)
class EventDefinition:
    id: int | str
    slug: str
    fields: tuple[BookingField, ...] = ()
    locations: tuple[str, ...] = ()

    def get_field(self, name: str) -> BookingField | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def fields_for(self, view: ViewMode) -> tuple[BookingField, ...]:
        return tuple(f for f in self.fields if f.applies_to(view))
