from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from booking_form.domain.entities.event_definition import (
    BookingField,
    EventDefinition,
    FieldKind,
    FieldOption,
)
from booking_form.domain.entities.view_mode import ViewMode

# External payloads call the new-booking view "booking".
_VIEW_IDS = {"booking": ViewMode.new, "new": ViewMode.new, "reschedule": ViewMode.reschedule}


class BookingFieldDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    type: FieldKind
    required: bool = False
    hidden: bool = False
    options: list[dict[str, Any]] = Field(default_factory=list)
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    views: list[dict[str, Any]] | None = None

    def to_entity(self) -> BookingField:
        views: tuple[ViewMode, ...] | None = None
        if self.views:
            resolved = [_VIEW_IDS.get(str(v.get("id"))) for v in self.views]
            views = tuple(v for v in resolved if v is not None)

        options = tuple(
            FieldOption(value=str(opt["value"]), label=opt.get("label"))
            for opt in self.options
            if opt.get("value") is not None
        )
        return BookingField(
            name=self.name,
            kind=self.type,
            required=self.required,
            hidden=self.hidden,
            options=options,
            min_length=self.min_length,
            max_length=self.max_length,
            views=views,
        )


class EventDefinitionDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str
    slug: str
    booking_fields: list[BookingFieldDTO] = Field(default_factory=list, alias="bookingFields")
    locations: list[dict[str, Any]] = Field(default_factory=list)

    def to_entity(self) -> EventDefinition:
        return EventDefinition(
            id=self.id,
            slug=self.slug,
            fields=tuple(f.to_entity() for f in self.booking_fields),
            locations=tuple(str(loc["type"]) for loc in self.locations if loc.get("type")),
        )
