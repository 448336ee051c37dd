"""FormLoader tests against the shipped forms/ directory and temp files."""

import pytest

from formflow_wizard.loader import FormLoader, parse_definition

from helpers.forms import DEMO_FORM_ID, FORMS_DIR

VALID_YAML = """
form:
  id: {form_id}
  title: Tiny
steps:
  - id: only
    title: Only step
    order: 1
    fields:
      - {{id: q1, type: text, label: Q1}}
"""


class TestShippedForms:
    def test_load_all(self):
        loader = FormLoader(FORMS_DIR)
        forms = loader.load_all()
        assert DEMO_FORM_ID in forms

    def test_demo_form_shape(self, demo_definition):
        assert demo_definition.step_count == 4
        assert [s.id for s in demo_definition.steps] == [
            "about-you", "experience", "contact", "attachments",
        ]
        recommend = demo_definition.get_field("recommend")
        assert recommend.conditions[0].action == "hide"
        assert recommend.step_id == "experience"

    def test_get_unknown(self):
        loader = FormLoader(FORMS_DIR)
        loader.load_all()
        with pytest.raises(ValueError, match="Form not found"):
            loader.get("nope")


class TestFiles:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FormLoader(tmp_path / "absent").load_all()

    def test_yml_extension(self, tmp_path):
        (tmp_path / "tiny.yml").write_text(VALID_YAML.format(form_id="tiny"), encoding="utf-8")
        loader = FormLoader(tmp_path)
        assert loader.load_all()["tiny"].get_field("q1").label == "Q1"

    def test_duplicate_form_id(self, tmp_path):
        (tmp_path / "a.yaml").write_text(VALID_YAML.format(form_id="dup"), encoding="utf-8")
        (tmp_path / "b.yaml").write_text(VALID_YAML.format(form_id="dup"), encoding="utf-8")
        with pytest.raises(ValueError, match="Duplicate form id"):
            FormLoader(tmp_path).load_all()

    def test_invalid_definition(self, tmp_path):
        bad = VALID_YAML.format(form_id="bad").replace("type: text", "type: slider")
        (tmp_path / "bad.yaml").write_text(bad, encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid form definition"):
            FormLoader(tmp_path).load_all()

    def test_missing_top_level_keys(self):
        with pytest.raises(ValueError, match="'form' and 'steps'"):
            parse_definition({"form": {"id": "x", "title": "X"}})

    @pytest.mark.parametrize(
        "raw",
        [
            {"form": "customer-feedback", "steps": []},
            {"form": {"id": "x", "title": "X"}, "steps": "about-you"},
            {"form": {"id": "x", "title": "X"}, "steps": ["about-you"]},
            {"form": {"id": "x", "title": "X"}, "steps": [{"id": "s1", "fields": ["q1"]}]},
        ],
    )
    def test_malformed_shapes_raise_value_error(self, raw):
        """Wrong YAML shapes surface as ValueError, never AttributeError."""
        with pytest.raises(ValueError):
            parse_definition(raw)

    def test_scalar_form_in_file(self, tmp_path):
        (tmp_path / "scalar.yaml").write_text("form: tiny\nsteps: []\n", encoding="utf-8")
        with pytest.raises(ValueError, match="'form' must be a mapping"):
            FormLoader(tmp_path).load_all()
