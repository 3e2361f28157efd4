from __future__ import annotations

import logging
from typing import Any

import httpx

from booking_form.application.exceptions import FieldCheckContractError, FieldCheckUpstreamError
from booking_form.application.ports.field_check import FieldCheckPort
from booking_form.application.ports.translator import TranslatorPort
from booking_form.domain.entities.event_definition import BookingField, FieldKind


class RemoteEmailCheck(FieldCheckPort):
    """
    Asks a remote service whether an email address may be used for booking.

    The service answers `POST {"email": ...}` with `{"valid": bool, "reason": str?}`.
    """

    def __init__(
        self,
        url: str,
        translator: TranslatorPort,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._translator = translator
        self._timeout = timeout
        self._client = client
        self._logger = logging.getLogger(__name__)

    def applies_to(self, field: BookingField) -> bool:
        return field.kind == FieldKind.email

    async def check(self, field: BookingField, value: Any) -> str | None:
        payload = await self._post({"email": str(value)})

        valid = payload.get("valid")
        if not isinstance(valid, bool):
            raise FieldCheckContractError("Email check response is missing boolean 'valid'.")
        if valid:
            return None

        reason = payload.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            reason = None
        self._logger.info("Email rejected by remote check", extra={"field": field.name, "reason": reason})
        return reason or self._translator.t("email_not_accepted")

    async def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        try:
            if self._client is not None:
                resp = await self._client.post(self._url, json=body, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self._url, json=body)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.warning("Email check request failed", extra={"reason": str(e)})
            raise FieldCheckUpstreamError(
                self._translator.t("email_check_unavailable", email=body.get("email"))
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FieldCheckContractError("Email check response is not valid JSON.") from e
        if not isinstance(data, dict):
            raise FieldCheckContractError("Email check response must be a JSON object.")
        return data
