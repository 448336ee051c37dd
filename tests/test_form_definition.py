"""FormDefinition integrity checks and field model parsing."""

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from formflow_wizard.models.condition import Condition
from formflow_wizard.loader import parse_definition
from formflow_wizard.models.field import CheckboxField, FormField, NumberField, field_mapper

from helpers.forms import make_definition

NAME = {"id": "name", "type": "text", "label": "Name"}


class TestFieldParsing:
    def test_discriminator(self):
        adapter = TypeAdapter(FormField)
        field = adapter.validate_python({"id": "a", "type": "number", "label": "Age"})
        assert isinstance(field, NumberField)

    def test_unknown_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            TypeAdapter(FormField).validate_python({"id": "a", "type": "slider", "label": "A"})

    def test_option_fields_need_options(self):
        with pytest.raises(PydanticValidationError):
            CheckboxField(id="c", label="C", options=[])

    def test_field_mapper_covers_every_type(self):
        assert set(field_mapper) == {
            "text", "email", "number", "textarea", "select",
            "radio", "checkbox", "file", "date",
        }

    def test_condition_value_types_preserved(self):
        """YAML true stays a bool and 1 stays an int."""
        assert Condition(field_id="a", operator="equals", value=True).value is True
        assert type(Condition(field_id="a", operator="equals", value=1).value) is int
        assert Condition(field_id="a", operator="equals", value="1").value == "1"

    def test_jump_requires_target(self):
        with pytest.raises(PydanticValidationError):
            Condition(field_id="a", operator="equals", value="x", action="jump_to_step")

    def test_unknown_operator_loads(self):
        cond = Condition(field_id="a", operator="matches", value="x")
        assert cond.operator == "matches"


class TestIntegrity:
    def test_steps_sorted_by_order(self):
        definition = parse_definition({
            "form": {"id": "f", "title": "F"},
            "steps": [
                {"id": "b", "title": "B", "order": 2, "fields": []},
                {"id": "a", "title": "A", "order": 1, "fields": [NAME]},
            ],
        })
        assert [s.id for s in definition.steps] == ["a", "b"]
        assert definition.step_index("b") == 1
        assert definition.get_field("name").step_id == "a"
        assert definition.steps[0].form_id == "f"

    def test_needs_a_step(self):
        with pytest.raises(PydanticValidationError, match="no steps"):
            make_definition()

    def test_duplicate_order(self):
        with pytest.raises(PydanticValidationError, match="duplicate step order"):
            parse_definition({
                "form": {"id": "f", "title": "F"},
                "steps": [
                    {"id": "a", "title": "A", "order": 1},
                    {"id": "b", "title": "B", "order": 1},
                ],
            })

    def test_duplicate_field_id(self):
        with pytest.raises(PydanticValidationError, match="duplicate field id"):
            make_definition([NAME], [NAME])

    def test_condition_on_unknown_field(self):
        field = {**NAME, "conditions": [{"field_id": "ghost", "operator": "equals", "value": 1}]}
        with pytest.raises(PydanticValidationError, match="unknown field"):
            make_definition([field])

    def test_jump_target_must_exist(self):
        field = {
            **NAME,
            "conditions": [{
                "field_id": "name", "operator": "equals", "value": "x",
                "action": "jump_to_step", "target": "nowhere",
            }],
        }
        with pytest.raises(PydanticValidationError, match="is not a step"):
            make_definition([field], [])

    def test_backward_jump_rejected(self):
        field = {
            **NAME,
            "conditions": [{
                "field_id": "name", "operator": "equals", "value": "x",
                "action": "jump_to_step", "target": "s1",
            }],
        }
        with pytest.raises(PydanticValidationError, match="must come after"):
            make_definition([], [field])

    def test_lookups_raise_key_error(self):
        definition = make_definition([NAME])
        with pytest.raises(KeyError):
            definition.get_field("ghost")
        with pytest.raises(KeyError):
            definition.step_index("s9")
