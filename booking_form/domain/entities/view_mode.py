from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ViewMode(str, Enum):
    new = "new"
    reschedule = "reschedule"


@dataclass(frozen=True)
class ReschedulingContext:
    reschedule_uid: str | None = None
    booking_data: Mapping[str, Any] | None = None  # existing booking record, read-only

    @property
    def is_rescheduling(self) -> bool:
        return bool(self.reschedule_uid) and self.booking_data is not None

    @property
    def view_mode(self) -> ViewMode:
        return ViewMode.reschedule if self.is_rescheduling else ViewMode.new
