"""FormFlow constants shared across the SDK.

Several constants can be overridden via environment variables so that
deployments can adjust limits without code changes.
"""

import os

# Seconds before a submission request is abandoned and reported as a
# TransportError.  Overridable via FORMFLOW_SUBMIT_TIMEOUT.
DEFAULT_SUBMIT_TIMEOUT = float(os.getenv("FORMFLOW_SUBMIT_TIMEOUT", "5"))

# Collection endpoint path, relative to the server base URL.
SUBMIT_PATH = "/api/submit"

# Upload size limit in MB when a file field does not set validation.max.
# Overridable via FORMFLOW_MAX_UPLOAD_MB.
DEFAULT_MAX_UPLOAD_MB = float(os.getenv("FORMFLOW_MAX_UPLOAD_MB", "10"))

# Accept-all MIME pattern used when a file field sets no pattern.
ACCEPT_ANY = "*/*"

# Dashboard "recent submissions" window in days.
RECENT_SUBMISSION_DAYS = int(os.getenv("RECENT_SUBMISSION_DAYS", "7"))

# Placeholder for request metadata the client did not provide.
UNKNOWN = "unknown"

# Fallback messages surfaced to callers when no better detail is available.
TRANSPORT_FALLBACK_MESSAGE = "Failed to submit the form"
SUBMIT_SUCCESS_MESSAGE = "Form submitted successfully"
MISSING_FIELDS_MESSAGE = "Form ID and answers are required"
STORAGE_FAILURE_MESSAGE = "Failed to save the submission"
UPLOAD_FAILURE_MESSAGE = "Failed to upload the file"
