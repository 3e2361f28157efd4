from __future__ import annotations

import logging

from booking_form.core.config import Settings, settings
from booking_form.core.logging import ContextFormatter, configure_logging
from booking_form.infrastructure.i18n.static_translator import StaticTranslator
from booking_form.infrastructure.checks.remote_email_check import RemoteEmailCheck
from booking_form.wiring.dependencies import build_booking_form, get_field_checks

from conftest import FakeInitialValues


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("LOCALE", "es")
    monkeypatch.setenv("EMAIL_CHECK_URL", "https://checks.example.com/email")
    monkeypatch.setenv("EMAIL_CHECK_TIMEOUT_SECONDS", "2.5")

    s = Settings(_env_file=None)

    assert s.LOCALE == "es"
    assert s.EMAIL_CHECK_URL == "https://checks.example.com/email"
    assert s.EMAIL_CHECK_TIMEOUT_SECONDS == 2.5


def test_context_formatter_appends_known_extras():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")
    record = logging.LogRecord("booking_form", logging.INFO, __file__, 1, "Booking form initialised", None, None)
    record.key = "k1"
    record.view = "reschedule"
    record.unrelated = "ignored"

    assert formatter.format(record) == "INFO:booking_form:Booking form initialised | view=reschedule key=k1"


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    added = []
    try:
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        added = [h for h in root.handlers if h not in before]
        assert len([h for h in root.handlers if isinstance(h.formatter, ContextFormatter)]) == 1
        assert root.level == logging.DEBUG
    finally:
        for handler in added:
            root.removeHandler(handler)
        root.setLevel(level)


def test_translator_fallbacks():
    es = StaticTranslator(locale="es")
    unknown = StaticTranslator(locale="xx")

    assert es.t("error_booking_event").startswith("Ocurrió")
    assert unknown.locale == "en"
    assert es.t("missing_key") == "missing_key"
    assert "ada@example.com" in es.t("email_check_unavailable", email="ada@example.com")


def test_build_booking_form_without_event():
    controller = build_booking_form(None, None, FakeInitialValues(key="k0"))

    assert controller.key == "k0"
    assert controller.schema.is_placeholder
    assert controller.before_verify_email() is False


def test_remote_email_check_only_outside_dev(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_CHECK_URL", "https://checks.example.com/email")

    monkeypatch.setattr(settings, "ENV", "dev")
    assert get_field_checks() == []

    monkeypatch.setattr(settings, "ENV", "prod")
    checks = get_field_checks()
    assert len(checks) == 1
    assert isinstance(checks[0], RemoteEmailCheck)

    monkeypatch.setattr(settings, "EMAIL_CHECK_URL", None)
    assert get_field_checks() == []
