"""FormLoader: reads YAML form definitions into typed models.

One YAML file describes one form::

    form:
      id: demo-form
      title: Customer satisfaction survey
      theme: {primary_color: "#3B82F6", ...}
      settings: {show_progress_bar: true}
    steps:
      - id: step-1
        title: About you
        order: 1
        fields:
          - {id: name, type: text, label: Full name, required: true}

``form_id`` on steps and ``step_id`` on fields are filled in from the
enclosing objects when omitted.

Usage::

    loader = FormLoader()            # defaults to forms/ relative to repo root
    loader.load_all()
    definition = loader.get("demo-form")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from formflow_wizard.models.form import FormDefinition

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_definition(raw: dict[str, Any]) -> FormDefinition:
    """Build a ``FormDefinition`` from a parsed YAML/JSON document."""
    if not isinstance(raw, dict) or "form" not in raw or "steps" not in raw:
        raise ValueError("form definition needs top-level 'form' and 'steps' keys")

    if not isinstance(raw["form"], dict):
        raise ValueError("'form' must be a mapping")
    if not isinstance(raw["steps"] or [], list):
        raise ValueError("'steps' must be a list")

    form_id = raw["form"].get("id")
    steps = []
    for step in raw["steps"] or []:
        if not isinstance(step, dict):
            raise ValueError(f"form {form_id}: every step must be a mapping")
        fields = step.get("fields") or []
        if not isinstance(fields, list) or not all(isinstance(f, dict) for f in fields):
            raise ValueError(f"form {form_id}: fields of step {step.get('id')} must be mappings")
        step = {**step, "form_id": step.get("form_id") or form_id}
        step["fields"] = [
            {**f, "step_id": f.get("step_id") or step.get("id")} for f in fields
        ]
        steps.append(step)

    return FormDefinition.model_validate({"form": raw["form"], "steps": steps})


# ---------------------------------------------------------------------------
# FormLoader
# ---------------------------------------------------------------------------

class FormLoader:
    """Loads all ``*.yaml`` files from a directory and provides lookup by form id.

    Attributes populated after :meth:`load_all`:

        forms: dict[form_id, FormDefinition]
    """

    def __init__(self, forms_dir: str | Path | None = None) -> None:
        if forms_dir is None:
            forms_dir = find_repo_root() / "forms"
        self._base = Path(forms_dir)
        self.forms: dict[str, FormDefinition] = {}

    def load(self, path: str | Path) -> FormDefinition:
        """Parse one YAML file.  Raises ``ValueError`` on invalid content."""
        raw = load_yaml(path)
        try:
            return parse_definition(raw)
        except PydanticValidationError as exc:
            raise ValueError(f"Invalid form definition in {path}: {exc}") from exc

    def load_all(self) -> dict[str, FormDefinition]:
        """Parse every ``*.yaml`` / ``*.yml`` file under the forms directory."""
        if not self._base.is_dir():
            raise FileNotFoundError(f"Missing forms directory: {self._base}")

        paths = sorted([*self._base.glob("*.yaml"), *self._base.glob("*.yml")])
        for path in paths:
            definition = self.load(path)
            if definition.id in self.forms:
                raise ValueError(f"Duplicate form id {definition.id!r} in {path}")
            self.forms[definition.id] = definition

        logger.info("FormLoader loaded %d forms from %s", len(self.forms), self._base)
        return self.forms

    def get(self, form_id: str) -> FormDefinition:
        """Return a loaded form.  Raises ``ValueError`` if unknown."""
        definition = self.forms.get(form_id)
        if definition is None:
            raise ValueError(f"Form not found: {form_id}")
        return definition
