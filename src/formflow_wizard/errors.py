"""Exception taxonomy for the FormFlow SDK.

Every error carries the HTTP status code the server maps it to, so route
handlers can raise freely and the global handlers in ``formflow_server``
pick the response.  None of these errors touches a wizard's answer set; each
is terminal for the current attempt only.
"""

from __future__ import annotations


class FormflowError(Exception):
    """Base class for all SDK errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FormflowError):
    """Malformed or missing request data, or answers failing field rules.

    ``field_errors`` maps a field id to its error messages when the error
    comes from answer validation; it is empty for request-shape errors.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        field_errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.field_errors = field_errors or {}


class TransportError(FormflowError):
    """The submission request failed: unreachable, timed out, non-2xx, or
    a response without the success indicator."""

    status_code = 502

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        # HTTP status of the failed response, None for network failures
        self.response_status = status_code


class StorageError(FormflowError):
    """Persistence failed; the caller only ever sees a generic message."""

    status_code = 500


class UploadError(FormflowError):
    """A file attachment was rejected (size/type) or could not be stored."""

    status_code = 400


class WizardStateError(FormflowError):
    """A wizard transition was requested in a state that does not allow it."""

    status_code = 409
