"""Form definition builders shared by the test modules."""

from pathlib import Path
from typing import Any

from formflow_wizard.loader import FormLoader, parse_definition
from formflow_wizard.models.form import FormDefinition

REPO_ROOT = Path(__file__).resolve().parents[2]
FORMS_DIR = REPO_ROOT / "forms"
DEMO_FORM_ID = "customer-feedback"


def make_definition(
    *steps: list[dict[str, Any]],
    form_id: str = "f1",
    title: str = "Test form",
) -> FormDefinition:
    """Build a definition from per-step field lists.

    Steps get ids ``s1``, ``s2``, ... in the order given.
    """
    raw = {
        "form": {"id": form_id, "title": title},
        "steps": [
            {"id": f"s{i}", "title": f"Step {i}", "order": i, "fields": list(fields)}
            for i, fields in enumerate(steps, start=1)
        ],
    }
    return parse_definition(raw)


def load_demo_definition() -> FormDefinition:
    """The customer feedback form shipped in ``forms/``."""
    return FormLoader(FORMS_DIR).load(FORMS_DIR / "customer_feedback.yaml")
