from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Any, Coroutine, Iterable, Mapping

from booking_form.application.dto.validation_schema import ValidationSchema
from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.application.ports.initial_values import InitialValuesPort
from booking_form.application.ports.translator import TranslatorPort
from booking_form.application.use_cases.build_schema import build_responses_schema
from booking_form.application.use_cases.form_errors import FormErrors
from booking_form.domain.entities.event_definition import EventDefinition
from booking_form.domain.entities.form_values import (
    GLOBAL_ERROR_FIELD,
    LOCATION_TYPE_FIELD,
    RESPONSES_FIELD,
    ErrorAnchor,
    FormValues,
    InitialValueBundle,
    LocationType,
)
from booking_form.domain.entities.validation import ErrorState, FieldError, ValidationOutcome
from booking_form.domain.entities.view_mode import ReschedulingContext, ViewMode


class BookingFormController:
    """
    State of the booking responses form for one booker session.

    Values are only replaced wholesale when the initial value key changes;
    every other change goes through `set_field_value`. `validate` is the only
    suspension point, and only the most recently started validation may apply
    its errors.
    """

    def __init__(
        self,
        event: EventDefinition | None,
        rescheduling: ReschedulingContext | None = None,
        *,
        initial_values: InitialValuesPort,
        translator: TranslatorPort,
        field_checks: Iterable[FieldCheckPort] = (),
    ) -> None:
        self._event = event
        self._rescheduling = rescheduling or ReschedulingContext()
        self._initial_values = initial_values
        self._translator = translator
        self._field_checks = tuple(field_checks)
        self._errors = FormErrors()
        self._values = FormValues()
        self._key: str | None = None
        self._sequence = 0
        self._logger = logging.getLogger(__name__)
        self.error_anchor = ErrorAnchor.new()
        self._schema = self._build_schema()
        self.sync_initial_values()

    @property
    def event(self) -> EventDefinition | None:
        return self._event

    @property
    def view_mode(self) -> ViewMode:
        return self._rescheduling.view_mode

    @property
    def schema(self) -> ValidationSchema:
        return self._schema

    @property
    def key(self) -> str | None:
        return self._key

    @property
    def values(self) -> FormValues:
        return self._values

    @property
    def form_email(self) -> Any:
        return self._responses().get("email")

    @property
    def form_name(self) -> Any:
        return self._responses().get("name")

    @property
    def errors(self) -> ErrorState:
        return self._errors.state()

    @property
    def field_errors(self) -> dict[str, FieldError]:
        return self._errors.field_errors

    def get_errors(self) -> ErrorState:
        return self._errors.state()

    def get_field_error(self, path: str) -> FieldError | None:
        return self._errors.get(path)

    def set_event(self, event: EventDefinition | None) -> None:
        self._event = event
        self._schema = self._build_schema()
        self.sync_initial_values()

    def set_rescheduling_context(self, rescheduling: ReschedulingContext) -> None:
        self._rescheduling = rescheduling
        self._schema = self._build_schema()
        self.sync_initial_values()

    def sync_initial_values(self) -> bool:
        """Consult the initial value resolver; re-initialise only if its key changed."""
        bundle = self._initial_values.resolve(self._event, self._rescheduling)
        if self._key is not None and bundle.key == self._key:
            return False
        self.reinitialize(bundle)
        return True

    def reinitialize(self, bundle: InitialValueBundle) -> None:
        self._values = bundle.initial_values
        self._key = bundle.key
        self._errors.clear()
        # Any validation still in flight belongs to the discarded state.
        self._sequence += 1
        self._logger.info(
            "Booking form initialised",
            extra={"key": bundle.key, "view": self.view_mode.value, "event_slug": self._event_slug()},
        )

    def set_field_value(self, path: str, value: Any) -> None:
        head, _, rest = path.partition(".")
        if not head:
            raise ValueError("Field path must not be empty.")
        if head == GLOBAL_ERROR_FIELD:
            raise ValueError(f"'{GLOBAL_ERROR_FIELD}' is reserved for form-level errors.")

        if head == LOCATION_TYPE_FIELD:
            if rest:
                raise ValueError(f"'{LOCATION_TYPE_FIELD}' has no nested fields.")
            self._values = replace(self._values, location_type=self._check_location(value))
        elif head == RESPONSES_FIELD:
            if rest:
                responses = _assign(self._responses(), rest, value)
            elif value is None or isinstance(value, Mapping):
                responses = copy.deepcopy(dict(value)) if value is not None else None
            else:
                raise ValueError(f"'{RESPONSES_FIELD}' must be a mapping or None.")
            self._values = replace(self._values, responses=responses)
        else:
            self._values = replace(self._values, extras=_assign(self._values.extras, path, value))

    def validate(self) -> Coroutine[Any, Any, ValidationOutcome]:
        """
        Start validating the current values and return an awaitable outcome.

        Values and schema are captured at call time, so edits made while the
        validation is pending do not affect it. The outcome is always returned,
        but its errors are applied only if no later validation or
        re-initialisation has started in the meantime.
        """
        self._sequence += 1
        return self._run_validation(self._sequence, self._schema, self._values.to_payload())

    async def _run_validation(
        self,
        token: int,
        schema: ValidationSchema,
        payload: dict[str, Any],
    ) -> ValidationOutcome:
        outcome = await schema.validate(payload)
        if token != self._sequence:
            self._logger.debug("Superseded validation discarded", extra={"token": token})
            return outcome
        self._errors.replace_field_errors(outcome.errors)
        return outcome

    def set_global_error(self, message: str) -> FieldError:
        return self._errors.set_global_error(message)

    def clear_errors(self, path: str | None = None) -> None:
        self._errors.clear(path)

    def before_verify_email(self) -> bool:
        """
        Guard run right before the email verification step.

        Clears all errors. Returns False, with a form-level error attached, when
        the event definition has not loaded yet; the caller must not verify then.
        """
        self._errors.clear()

        if self._event is None:
            self._errors.set_global_error(self._translator.t("error_booking_event"))
            self._logger.warning(
                "Email verification requested before event loaded",
                extra={"view": self.view_mode.value, "reason": "event_not_loaded"},
            )
            return False
        return True

    def _responses(self) -> Mapping[str, Any]:
        responses = self._values.responses
        return responses if isinstance(responses, Mapping) else {}

    def _check_location(self, value: Any) -> str | None:
        """Accept the event's own location kinds once it has loaded, the known kinds otherwise."""
        if value is None:
            return None
        location = value.value if isinstance(value, LocationType) else str(value)
        if self._event is not None and self._event.locations:
            if location not in self._event.locations:
                raise ValueError(f"Location {location!r} is not offered by event {self._event.slug!r}.")
            return location
        return LocationType(location).value

    def _build_schema(self) -> ValidationSchema:
        return build_responses_schema(self._event, self.view_mode, self._field_checks)

    def _event_slug(self) -> str | None:
        return self._event.slug if self._event else None


def _assign(container: Mapping[str, Any] | None, dotted: str, value: Any) -> dict[str, Any]:
    parts = dotted.split(".")
    if any(not part for part in parts):
        raise ValueError(f"Invalid field path: {dotted!r}")

    root = copy.deepcopy(dict(container)) if container else {}
    node = root
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = copy.deepcopy(value)
    return root
