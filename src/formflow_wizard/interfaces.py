"""Abstract interfaces for the pluggable edges of the SDK.

These ABCs define the contract that concrete implementations must fulfil.
The SDK ships one implementation of each:

  - ``SubmissionTransport`` → :class:`~formflow_wizard.transport.HttpSubmissionTransport`
  - ``BlobStorage``         → :class:`~formflow_wizard.uploads.LocalBlobStorage`

Typical integration flow::

    definition = FormLoader().load("forms/customer_feedback.yaml")
    transport: SubmissionTransport = HttpSubmissionTransport("https://forms.example.com")
    wizard = WizardController(definition, transport)
    # ... set answers, next(), ..., then:
    result = await wizard.submit()
"""

from abc import ABC, abstractmethod
from typing import Any

from formflow_wizard.models.submission import SubmissionResult


class SubmissionTransport(ABC):
    """Interface for delivering a finished answer set to the collector.

    Implementations issue exactly one delivery attempt per call and raise
    :class:`~formflow_wizard.errors.TransportError` on any failure.  They
    never retry; retrying is a user decision surfaced by the wizard.
    """

    @abstractmethod
    async def submit(self, form_id: str, answers: dict[str, Any]) -> SubmissionResult:
        """Deliver ``answers`` for ``form_id``.

        Returns
        -------
        SubmissionResult
            The collector's success body, carrying the submission id.
        """
        ...


class BlobStorage(ABC):
    """Interface for the file store backing ``file`` fields."""

    @abstractmethod
    async def put(self, name: str, data: bytes, content_type: str) -> None:
        """Store ``data`` under ``name``.  Must not overwrite an existing object."""
        ...

    @abstractmethod
    def public_url(self, name: str) -> str:
        """Return the URL under which a stored object is served."""
        ...
