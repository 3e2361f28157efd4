from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Reserved pseudo-field carrying whole-form errors. The per-field error model
# has no root slot, so this name is never used for data.
GLOBAL_ERROR_FIELD = "globalError"
RESPONSES_FIELD = "responses"
LOCATION_TYPE_FIELD = "locationType"


class LocationType(str, Enum):
    in_person = "inPerson"
    attendee_in_person = "attendeeInPerson"
    phone = "phone"
    user_phone = "userPhone"
    link = "link"
    somewhere_else = "somewhereElse"
    daily_video = "integrations:daily"
    google_meet = "integrations:google:meet"
    zoom = "integrations:zoom"
    office365_video = "integrations:office365_video"


@dataclass(frozen=True)
class FormValues:
    location_type: str | None = None  # a LocationType value or one of the event's own kinds
    responses: dict[str, Any] | None = None
    extras: dict[str, Any] = field(default_factory=dict)
    # Attachment point for form-level errors only; always None.
    global_error: None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = copy.deepcopy(self.extras)
        if self.location_type is not None:
            payload[LOCATION_TYPE_FIELD] = self.location_type
        payload[RESPONSES_FIELD] = copy.deepcopy(self.responses)
        return payload


@dataclass(frozen=True)
class InitialValueBundle:
    initial_values: FormValues
    key: str


@dataclass(frozen=True)
class ErrorAnchor:
    """Handle the UI binds to the error display region to scroll to or focus it."""

    element_id: str

    @classmethod
    def new(cls) -> ErrorAnchor:
        return cls(element_id=f"booker-form-error-{uuid.uuid4().hex[:8]}")
