import pytest
from pydantic import ValidationError

from entitykit.core.exceptions import MissingFieldPolicy
from entitykit.models.read_plan import FieldRule, ReadPlan


def test_read_plan_defaults():
    plan = ReadPlan.model_validate({"fields": [{"name": "title"}]})

    rule = plan.fields[0]
    assert rule.type == "string"
    assert rule.required is False
    assert rule.output_key == "title"
    assert plan.policy is MissingFieldPolicy.FAIL


def test_alias_sets_output_key():
    rule = FieldRule(name="user_id", type="int", alias="id")
    assert rule.output_key == "id"


def test_enum_rule_requires_decoder_name():
    with pytest.raises(ValidationError) as exc:
        FieldRule(name="status", type="enum")
    assert "enum is required" in str(exc.value)


def test_enum_name_only_valid_for_enum_rules():
    with pytest.raises(ValidationError) as exc:
        FieldRule(name="status", type="string", enum="Status")
    assert "only valid" in str(exc.value)


def test_unknown_field_type_is_rejected():
    with pytest.raises(ValidationError):
        FieldRule(name="x", type="decimal")


def test_plan_requires_at_least_one_field():
    with pytest.raises(ValidationError):
        ReadPlan(fields=[])


def test_duplicate_output_keys_are_rejected():
    with pytest.raises(ValidationError) as exc:
        ReadPlan.model_validate(
            {"fields": [{"name": "a"}, {"name": "b", "alias": "a"}]}
        )
    assert "duplicate output key" in str(exc.value)


def test_missing_policy_maps_to_enum():
    plan = ReadPlan.model_validate({"fields": [{"name": "a"}], "missing_policy": "warn"})
    assert plan.policy is MissingFieldPolicy.WARN

    with pytest.raises(ValidationError):
        ReadPlan.model_validate({"fields": [{"name": "a"}], "missing_policy": "ignore"})
