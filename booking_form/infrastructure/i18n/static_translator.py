from __future__ import annotations

from booking_form.application.ports.translator import TranslatorPort

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "error_booking_event": "An error occurred while loading the event. Please refresh the page and try again.",
        "email_not_accepted": "This email address cannot be used for booking.",
        "email_check_unavailable": "We could not verify {email} right now. Please try again.",
    },
    "es": {
        "error_booking_event": "Ocurrió un error al cargar el evento. Actualiza la página e inténtalo de nuevo.",
        "email_not_accepted": "Esta dirección de correo no se puede usar para reservar.",
        "email_check_unavailable": "No pudimos verificar {email} en este momento. Inténtalo de nuevo.",
    },
}


class StaticTranslator(TranslatorPort):
    def __init__(self, locale: str = "en", messages: dict[str, dict[str, str]] | None = None) -> None:
        self._messages = messages or MESSAGES
        self._locale = locale if locale in self._messages else "en"

    @property
    def locale(self) -> str:
        return self._locale

    def t(self, key: str, **params: object) -> str:
        template = self._messages.get(self._locale, {}).get(key)
        if template is None:
            template = self._messages.get("en", {}).get(key, key)
        if params:
            try:
                return template.format(**params)
            except (KeyError, IndexError):
                return template
        return template
