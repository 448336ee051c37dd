"""HttpSubmissionTransport: posts a finished answer set to the collector.

One ``POST /api/submit`` per call with the JSON body ``{formId, answers}``.
Every failure mode is reported as :class:`TransportError`:

  - the endpoint is unreachable or the request times out
  - the response status is not 2xx
  - the body is not JSON or lacks ``success: true``

The error message is the endpoint's ``error`` field when present, otherwise
a generic fallback.  No retries are attempted.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from formflow_wizard.constants import (
    DEFAULT_SUBMIT_TIMEOUT,
    SUBMIT_PATH,
    TRANSPORT_FALLBACK_MESSAGE,
)
from formflow_wizard.errors import TransportError
from formflow_wizard.interfaces import SubmissionTransport
from formflow_wizard.models.submission import SubmissionResult

logger = logging.getLogger(__name__)


class HttpSubmissionTransport(SubmissionTransport):
    """Submission transport over HTTP.

    Args:
        base_url: collector base URL, e.g. ``https://forms.example.com``
        timeout: request timeout in seconds
        client: optional pre-built ``httpx.AsyncClient`` (tests inject one
            backed by ``httpx.MockTransport``); the transport never closes
            a client it did not create
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_SUBMIT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + SUBMIT_PATH
        self._timeout = timeout
        self._client = client

    async def submit(self, form_id: str, answers: dict[str, Any]) -> SubmissionResult:
        body = {"formId": form_id, "answers": answers}

        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=body, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=body)
        except httpx.TimeoutException as exc:
            logger.warning("Submit to %s timed out after %ss", self._url, self._timeout)
            raise TransportError(TRANSPORT_FALLBACK_MESSAGE) from exc
        except httpx.HTTPError as exc:
            logger.warning("Submit to %s failed: %s", self._url, exc)
            raise TransportError(TRANSPORT_FALLBACK_MESSAGE) from exc

        payload = self._parse_json(response)

        if not response.is_success:
            message = _error_message(payload)
            logger.warning(
                "Submit rejected: status=%d form_id=%s error=%s",
                response.status_code, form_id, message,
            )
            raise TransportError(message, status_code=response.status_code)

        if not isinstance(payload, dict) or payload.get("success") is not True:
            raise TransportError(_error_message(payload), status_code=response.status_code)

        try:
            return SubmissionResult.model_validate(payload)
        except ValueError as exc:
            # pydantic.ValidationError subclasses ValueError
            raise TransportError(
                TRANSPORT_FALLBACK_MESSAGE, status_code=response.status_code,
            ) from exc

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None


def _error_message(payload: Any) -> str:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error:
            return error
    return TRANSPORT_FALLBACK_MESSAGE
