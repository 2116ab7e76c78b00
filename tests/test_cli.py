import json

import pytest
import yaml

from entitykit.cli import build_entity, cli, load_document, main, validate_plan
from entitykit.core.exceptions import RequiredFieldMissingError
from entitykit.entities.mapping_entity import MappingEntity
from entitykit.entities.record_entity import RecordEntity


@pytest.fixture
def payload_file(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps({"user_id": "42", "active": 1, "profile": '{"city": "Oslo"}'}))
    return path


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "fields": [
                    {"name": "user_id", "type": "int", "required": True},
                    {"name": "active", "type": "bool"},
                    {"name": "profile", "type": "object"},
                ]
            }
        )
    )
    return path


def test_load_document_json_and_yaml(tmp_path, payload_file):
    assert load_document(payload_file)["user_id"] == "42"

    yml = tmp_path / "p.yml"
    yml.write_text("a: 1\n")
    assert load_document(yml) == {"a": 1}


def test_load_document_rejects_unknown_suffix_and_missing_file(tmp_path):
    txt = tmp_path / "p.txt"
    txt.write_text("a")
    with pytest.raises(ValueError, match="Unsupported file format"):
        load_document(txt)
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "nope.json")


def test_build_entity_variants():
    assert isinstance(build_entity({"a": 1}), MappingEntity)
    record = build_entity({"a": 1}, "record")
    assert isinstance(record, RecordEntity)
    assert record.get("a") == 1

    with pytest.raises(ValueError, match="Unknown entity variant"):
        build_entity({}, "tuple")
    with pytest.raises(ValueError, match="must be an object"):
        build_entity([1, 2])


def test_main_without_plan_lists_fields():
    result = main(payload_dict={"a": 1, "b": "x"})

    assert result == {"status": "success", "variant": "mapping", "data": {"a": 1, "b": "x"}}


def test_main_with_plan_file(payload_file, plan_file):
    result = main(payload_path=str(payload_file), plan=str(plan_file), variant="record")

    assert result["data"]["user_id"] == 42
    assert result["data"]["active"] is True
    assert result["data"]["profile"].city == "Oslo"


def test_main_requires_payload():
    with pytest.raises(ValueError, match="Either payload_path or payload_dict"):
        main()


def test_main_propagates_required_field_errors():
    plan = {"fields": [{"name": "id", "type": "int", "required": True}]}
    with pytest.raises(RequiredFieldMissingError):
        main(payload_dict={"id": "x"}, plan=plan)


def test_validate_plan(tmp_path, plan_file):
    assert validate_plan(str(plan_file)) is True

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"fields": []}))
    with pytest.raises(Exception):
        validate_plan(str(bad))


def test_cli_read_prints_json(payload_file, plan_file, capsys):
    with pytest.raises(SystemExit) as exc:
        cli(["read", str(payload_file), "--plan", str(plan_file), "--request-id", "r-1"])

    assert exc.value.code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"user_id": 42, "active": True, "profile": {"city": "Oslo"}}


def test_cli_read_failure_exits_non_zero(tmp_path, plan_file):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({"user_id": "nope"}))

    with pytest.raises(SystemExit) as exc:
        cli(["read", str(payload), "--plan", str(plan_file)])

    assert exc.value.code == 1


def test_cli_validate(plan_file):
    with pytest.raises(SystemExit) as exc:
        cli(["validate", str(plan_file)])

    assert exc.value.code == 0


def test_cli_read_renders_yaml_dates_and_sets(tmp_path, capsys):
    payload = tmp_path / "payload.yaml"
    payload.write_text("created: 2024-01-01\nseen: 2024-01-02T03:04:05\ntags: !!set {a: null}\n")

    with pytest.raises(SystemExit) as exc:
        cli(["read", str(payload)])

    assert exc.value.code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"created": "2024-01-01", "seen": "2024-01-02T03:04:05", "tags": ["a"]}


def test_cli_read_exits_non_zero_when_output_cannot_be_rendered(tmp_path, capsys):
    payload = tmp_path / "payload.yaml"
    payload.write_text("blob: !!binary aGVsbG8=\n")

    with pytest.raises(SystemExit) as exc:
        cli(["read", str(payload)])

    assert exc.value.code == 1
