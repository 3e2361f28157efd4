from __future__ import annotations

from typing import Iterable

from booking_form.domain.entities.form_values import GLOBAL_ERROR_FIELD
from booking_form.domain.entities.validation import ErrorState, FieldError


class FormErrors:
    """
    Errors attached to form fields, keyed by field path.

    Form-level errors ride on the reserved `globalError` path because the error
    model only knows per-field errors. That slot holds at most one error and is
    independent of the response field errors.
    """

    def __init__(self) -> None:
        self._errors: dict[str, FieldError] = {}

    def set_error(self, path: str, message: str, type: str = "manual") -> FieldError:
        error = FieldError(path=path, message=message, type=type)
        self._errors[path] = error
        return error

    def set_global_error(self, message: str) -> FieldError:
        return self.set_error(GLOBAL_ERROR_FIELD, message)

    def replace_field_errors(self, errors: Iterable[FieldError]) -> None:
        """Swap all per-field errors for `errors`, keeping the global slot."""
        global_error = self._errors.get(GLOBAL_ERROR_FIELD)
        self._errors = {e.path: e for e in errors if e.path != GLOBAL_ERROR_FIELD}
        if global_error is not None:
            self._errors[GLOBAL_ERROR_FIELD] = global_error

    def clear(self, path: str | None = None) -> None:
        if path is None:
            self._errors.clear()
            return
        self._errors.pop(path, None)

    def get(self, path: str) -> FieldError | None:
        return self._errors.get(path)

    @property
    def global_error(self) -> FieldError | None:
        return self._errors.get(GLOBAL_ERROR_FIELD)

    @property
    def field_errors(self) -> dict[str, FieldError]:
        return {path: e for path, e in self._errors.items() if path != GLOBAL_ERROR_FIELD}

    def state(self) -> ErrorState:
        global_error = self.global_error
        return ErrorState(has_form_errors=global_error is not None, form_errors=global_error)
