"""CSV export of stored submissions for the dashboard.

One header row, then one row per submission with the answers JSON-encoded
into a single column.  Values are quoted by the ``csv`` module, so answers
containing commas or newlines survive a round trip through a spreadsheet.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable

from formflow_wizard.models.submission import SubmissionInfo

CSV_HEADERS: list[str] = ["ID", "Form ID", "Answers", "IP Address", "User Agent", "Date"]


def submission_row(submission: SubmissionInfo) -> list[str]:
    """Flatten one submission into the export columns."""
    return [
        submission.id,
        submission.form_id,
        json.dumps(submission.answers, ensure_ascii=False),
        submission.metadata.ip_address,
        submission.metadata.user_agent,
        submission.created_at.isoformat(),
    ]


def submissions_to_csv(submissions: Iterable[SubmissionInfo]) -> str:
    """Render submissions as CSV text.  An empty input yields an empty string."""
    rows = [submission_row(s) for s in submissions]
    if not rows:
        return ""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(rows)
    return buf.getvalue()


def export_filename(form_id: str) -> str:
    return f"submissions-{form_id}.csv"
