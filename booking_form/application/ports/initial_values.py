from __future__ import annotations

from abc import ABC, abstractmethod

from booking_form.domain.entities.event_definition import EventDefinition
from booking_form.domain.entities.form_values import InitialValueBundle
from booking_form.domain.entities.view_mode import ReschedulingContext


class InitialValuesPort(ABC):
    @abstractmethod
    def resolve(
        self,
        event: EventDefinition | None,
        rescheduling: ReschedulingContext,
    ) -> InitialValueBundle:
        """
        Compute the baseline form values for an event and rescheduling context.

        Requirements:
        - Must be cheap and side-effect free; the controller calls it on every input change
        - `key` must change whenever `initial_values` has to replace the current form state,
          and must stay stable otherwise
        - Must handle `event` being None (event definition not loaded yet)
        """
        raise NotImplementedError
