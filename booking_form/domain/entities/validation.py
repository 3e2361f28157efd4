from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    path: str  # e.g. "responses.email" or "globalError"
    message: str
    type: str = "invalid"


@dataclass(frozen=True)
class ErrorState:
    has_form_errors: bool
    form_errors: FieldError | None = None


@dataclass(frozen=True)
class ValidationOutcome:
    data: dict[str, Any] | None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors

    def errors_for(self, path: str) -> list[FieldError]:
        return [e for e in self.errors if e.path == path]
