from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from booking_form.domain.entities.event_definition import BookingField


class FieldCheckPort(ABC):
    @abstractmethod
    def applies_to(self, field: BookingField) -> bool:
        """Whether this check runs for the given booking field."""
        raise NotImplementedError

    @abstractmethod
    async def check(self, field: BookingField, value: Any) -> str | None:
        """
        Check a value that already passed the synchronous rules.

        Returns an error message, or None when the value is accepted.
        May raise FieldCheckUpstreamError / FieldCheckContractError.
        """
        raise NotImplementedError
