"""formflow_wizard: multi-step form wizard and submission SDK.

Public API:
    WizardController      step navigation, answer set and final submit
    WizardState           lifecycle states of a wizard session
    VisibilityEvaluator   decides whether a field is shown for given answers
    FieldValidator        per-field required / bounds / pattern checks
    FormLoader            loads YAML form definitions into typed models

Submission path:
    SubmissionTransport       ABC for delivering a finished answer set
    HttpSubmissionTransport   httpx implementation posting to /api/submit
    SubmissionCollector       server side: validate, stamp metadata, persist
    FormDashboard             listing, browsing, counters and CSV export

Embedding and files:
    EmbedRenderer       iframe snippet and embed page rendering
    BlobStorage         ABC for the file store behind ``file`` fields
    LocalBlobStorage    directory-backed blob store
"""

from formflow_wizard.collector import SubmissionCollector, client_info_from_headers
from formflow_wizard.dashboard import FormDashboard
from formflow_wizard.embed import EmbedRenderer, submitted_message
from formflow_wizard.errors import (
    FormflowError,
    StorageError,
    TransportError,
    UploadError,
    ValidationError,
    WizardStateError,
)
from formflow_wizard.evaluator import VisibilityEvaluator
from formflow_wizard.export import submissions_to_csv
from formflow_wizard.interfaces import BlobStorage, SubmissionTransport
from formflow_wizard.loader import FormLoader, parse_definition
from formflow_wizard.models.form import FormDefinition, Theme
from formflow_wizard.models.submission import SubmissionResult
from formflow_wizard.theme import theme_css_variables
from formflow_wizard.transport import HttpSubmissionTransport
from formflow_wizard.uploads import LocalBlobStorage, store_upload
from formflow_wizard.validation import FieldValidator
from formflow_wizard.wizard import WizardController, WizardState

__all__ = [
    # Wizard
    "WizardController",
    "WizardState",
    "VisibilityEvaluator",
    "FieldValidator",
    "FormLoader",
    "FormDefinition",
    "parse_definition",
    # Submission
    "SubmissionTransport",
    "HttpSubmissionTransport",
    "SubmissionCollector",
    "SubmissionResult",
    "client_info_from_headers",
    "FormDashboard",
    "submissions_to_csv",
    # Embed / files / theme
    "EmbedRenderer",
    "submitted_message",
    "BlobStorage",
    "LocalBlobStorage",
    "store_upload",
    "Theme",
    "theme_css_variables",
    # Errors
    "FormflowError",
    "ValidationError",
    "TransportError",
    "StorageError",
    "UploadError",
    "WizardStateError",
]
