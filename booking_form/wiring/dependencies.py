from functools import lru_cache

from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.application.ports.initial_values import InitialValuesPort
from booking_form.application.ports.translator import TranslatorPort
from booking_form.application.use_cases.booking_form import BookingFormController
from booking_form.core.config import settings
from booking_form.core.logging import configure_logging
from booking_form.domain.entities.event_definition import EventDefinition
from booking_form.domain.entities.view_mode import ReschedulingContext
from booking_form.infrastructure.checks.remote_email_check import RemoteEmailCheck
from booking_form.infrastructure.i18n.static_translator import StaticTranslator


@lru_cache
def get_translator() -> TranslatorPort:
    return StaticTranslator(locale=settings.LOCALE)


def get_field_checks() -> list[FieldCheckPort]:
    if not settings.EMAIL_CHECK_URL or settings.ENV.lower() in {"dev", "local"}:
        return []
    return [
        RemoteEmailCheck(
            url=settings.EMAIL_CHECK_URL,
            translator=get_translator(),
            timeout=settings.EMAIL_CHECK_TIMEOUT_SECONDS,
        )
    ]


def build_booking_form(
    event: EventDefinition | None,
    rescheduling: ReschedulingContext | None,
    initial_values: InitialValuesPort,
) -> BookingFormController:
    configure_logging()
    return BookingFormController(
        event,
        rescheduling,
        initial_values=initial_values,
        translator=get_translator(),
        field_checks=get_field_checks(),
    )
