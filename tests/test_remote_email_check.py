import json

import httpx
import pytest
import respx

from booking_form.application.exceptions import FieldCheckContractError, FieldCheckUpstreamError
from booking_form.domain.entities.event_definition import BookingField, FieldKind
from booking_form.infrastructure.checks.remote_email_check import RemoteEmailCheck
from booking_form.infrastructure.i18n.static_translator import StaticTranslator

CHECK_URL = "https://checks.example.com/email"
EMAIL_FIELD = BookingField(name="email", kind=FieldKind.email, required=True)


def make_check(**kwargs) -> RemoteEmailCheck:
    return RemoteEmailCheck(url=CHECK_URL, translator=StaticTranslator(), **kwargs)


def test_applies_to_email_fields_only():
    check = make_check()

    assert check.applies_to(EMAIL_FIELD)
    assert not check.applies_to(BookingField(name="guests", kind=FieldKind.multiemail))


@pytest.mark.asyncio
async def test_accepted_email():
    with respx.mock() as m:
        route = m.post(CHECK_URL).respond(200, json={"valid": True})

        result = await make_check().check(EMAIL_FIELD, "ada@example.com")

        assert result is None
        assert route.called
        assert json.loads(route.calls.last.request.content) == {"email": "ada@example.com"}


@pytest.mark.asyncio
async def test_rejected_email_uses_reason_or_default():
    with respx.mock() as m:
        m.post(CHECK_URL).mock(
            side_effect=[
                httpx.Response(200, json={"valid": False, "reason": "Already booked"}),
                httpx.Response(200, json={"valid": False}),
            ]
        )
        check = make_check()

        assert await check.check(EMAIL_FIELD, "a@example.com") == "Already booked"
        assert await check.check(EMAIL_FIELD, "a@example.com") == StaticTranslator().t("email_not_accepted")


@pytest.mark.asyncio
async def test_upstream_failure():
    with respx.mock() as m:
        m.post(CHECK_URL).respond(503)

        with pytest.raises(FieldCheckUpstreamError, match="a@example.com"):
            await make_check().check(EMAIL_FIELD, "a@example.com")


@pytest.mark.asyncio
async def test_network_error_with_shared_client():
    with respx.mock() as m:
        m.post(CHECK_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(FieldCheckUpstreamError):
                await make_check(client=client).check(EMAIL_FIELD, "a@example.com")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"status": "ok"}, ["valid"]])
async def test_malformed_response(body):
    with respx.mock() as m:
        m.post(CHECK_URL).respond(200, json=body)

        with pytest.raises(FieldCheckContractError):
            await make_check().check(EMAIL_FIELD, "a@example.com")


@pytest.mark.asyncio
@pytest.mark.parametrize("reason", [{"code": 7}, 42, "   "])
async def test_non_text_reason_falls_back_to_default(reason):
    with respx.mock() as m:
        m.post(CHECK_URL).respond(200, json={"valid": False, "reason": reason})

        message = await make_check().check(EMAIL_FIELD, "a@example.com")

        assert message == StaticTranslator().t("email_not_accepted")
