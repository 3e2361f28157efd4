from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from booking_form.application.exceptions import FieldCheckContractError, FieldCheckUpstreamError
from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.domain.entities.event_definition import BookingField
from booking_form.domain.entities.form_values import RESPONSES_FIELD
from booking_form.domain.entities.validation import FieldError, ValidationOutcome
from booking_form.domain.entities.view_mode import ViewMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationSchema:
    """
    Validation schema for the form payload.

    Only the `responses` key is checked. Every other top-level key, and every
    response key without a declared rule, is carried into the validated output
    as-is. A schema without a model is the placeholder used until the event
    definition has loaded; it accepts any payload.
    """

    view: ViewMode
    model: type[BaseModel] | None = None
    checks: tuple[tuple[BookingField, FieldCheckPort], ...] = ()
    event_slug: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.model is None

    async def validate(self, payload: Mapping[str, Any]) -> ValidationOutcome:
        data = copy.deepcopy(dict(payload))
        if self.model is None:
            return ValidationOutcome(data=data)

        raw = data.get(RESPONSES_FIELD)
        if raw is None:
            raw = {}

        errors: list[FieldError] = []
        validated: dict[str, Any] | None = None
        try:
            validated = self.model.model_validate(raw).model_dump(by_alias=True)
        except ValidationError as exc:
            errors.extend(_to_field_errors(exc))

        if isinstance(raw, Mapping):
            failed = {e.path for e in errors}
            errors.extend(await self._run_checks(raw, failed))

        if errors or validated is None:
            return ValidationOutcome(data=None, errors=tuple(_dedupe(errors)))

        responses = dict(raw)
        for info in self.model.model_fields.values():
            if info.alias in responses:
                responses[info.alias] = validated[info.alias]
        data[RESPONSES_FIELD] = responses
        return ValidationOutcome(data=data)

    async def _run_checks(self, responses: Mapping[str, Any], failed: set[str]) -> list[FieldError]:
        pending = [
            (field, check)
            for field, check in self.checks
            if _path(field.name) not in failed and not _is_blank(responses.get(field.name))
        ]
        if not pending:
            return []
        results = await asyncio.gather(
            *(self._run_check(field, check, responses[field.name]) for field, check in pending)
        )
        return [r for r in results if r is not None]

    async def _run_check(self, field: BookingField, check: FieldCheckPort, value: Any) -> FieldError | None:
        try:
            message = await check.check(field, value)
        except (FieldCheckUpstreamError, FieldCheckContractError) as e:
            logger.warning(
                "Field check unavailable",
                extra={"field": field.name, "event_slug": self.event_slug, "reason": str(e)},
            )
            return FieldError(path=_path(field.name), message=str(e), type="check_unavailable")
        except Exception as e:
            logger.warning(
                "Field check failed unexpectedly",
                extra={"field": field.name, "event_slug": self.event_slug, "reason": repr(e)},
            )
            return FieldError(path=_path(field.name), message="This field could not be checked", type="check_unavailable")
        if message is None:
            return None
        return FieldError(path=_path(field.name), message=message, type="check_failed")


def _path(name: str) -> str:
    return f"{RESPONSES_FIELD}.{name}"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors(include_url=False):
        loc = err.get("loc") or ()
        # Errors attach to the top-level response field, nested parts included.
        path = _path(str(loc[0])) if loc else RESPONSES_FIELD
        errors.append(FieldError(path=path, message=err["msg"], type=err["type"]))
    return errors


def _dedupe(errors: list[FieldError]) -> list[FieldError]:
    seen: set[str] = set()
    unique: list[FieldError] = []
    for error in errors:
        if error.path in seen:
            continue
        seen.add(error.path)
        unique.append(error)
    return unique
