"""
Command-line interface and entry points for entitykit.

Loads a JSON/YAML payload into an entity and prints either every visible field
or the result of a read plan, as JSON. Useful for checking how a request body
will coerce before wiring a plan into application code.
"""

import argparse
import dataclasses
import json
import sys
from datetime import date, datetime, time
from enum import Enum
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel

from entitykit.core.base_entity import BaseEntity
from entitykit.core.logger import configure_root_logger, get_logger, push_request_id, reset_request_id
from entitykit.entities.mapping_entity import MappingEntity
from entitykit.entities.record_entity import RecordEntity
from entitykit.models.read_plan import ReadPlan
from entitykit.reader import read_entity

logger = get_logger(__name__)

VARIANTS = {
    "mapping": MappingEntity,
    "record": RecordEntity,
}


def load_document(path: Union[str, Path]) -> Any:
    """Load a JSON or YAML document from disk."""
    doc_file = Path(path)
    if not doc_file.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(doc_file, "r", encoding="utf-8") as f:
        if doc_file.suffix == ".json":
            return json.load(f)
        if doc_file.suffix in (".yaml", ".yml"):
            return yaml.safe_load(f)
    raise ValueError(f"Unsupported file format: {doc_file.suffix}. Use .json or .yaml")


def build_entity(payload: Dict[str, Any], variant: str = "mapping") -> BaseEntity:
    """Wrap a decoded payload in the requested entity variant."""
    if not isinstance(payload, dict):
        raise ValueError(f"Payload must be an object at the top level, got {type(payload).__name__}")
    try:
        entity_class = VARIANTS[variant]
    except KeyError as exc:
        raise ValueError(f"Unknown entity variant {variant!r}; expected one of {sorted(VARIANTS)}") from exc

    if entity_class is RecordEntity:
        return RecordEntity(SimpleNamespace(**payload))
    return entity_class(payload)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, SimpleNamespace):
        return vars(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(
    payload_path: Optional[str] = None,
    payload_dict: Optional[Dict[str, Any]] = None,
    *,
    plan: Union[str, Dict[str, Any], ReadPlan, None] = None,
    variant: str = "mapping",
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Read a payload through an entity.

    Can be called with either:
    - A payload file path (JSON/YAML)
    - A payload dictionary (programmatic)

    Args:
        payload_path: Path to a JSON/YAML payload file
        payload_dict: Already decoded payload
        plan: Read plan as a file path, a dict or a ReadPlan; when omitted every
            visible field is returned as stored
        variant: Entity variant to wrap the payload in ("mapping" or "record")
        request_id: Optional id attached to log records for this call

    Returns:
        Result with status, variant and the read data

    Raises:
        FileNotFoundError: If a payload or plan file doesn't exist
        ValueError: If neither payload_path nor payload_dict provided
        RequiredFieldMissingError: If the plan's missing policy is "fail"
            and a required field has no value
    """
    token = push_request_id(request_id)
    try:
        if payload_dict is not None:
            payload = payload_dict
            logger.info("Using provided payload dictionary")
        elif payload_path:
            payload = load_document(payload_path)
            logger.info(f"Loaded payload from {payload_path}")
        else:
            raise ValueError("Either payload_path or payload_dict must be provided")

        entity = build_entity(payload, variant)

        if plan is None:
            data = entity.list_all()
        else:
            if isinstance(plan, (str, Path)):
                plan = ReadPlan.model_validate(load_document(plan))
            data = read_entity(entity, plan)

        logger.info(f"Read {len(data)} field(s) using {entity.__class__.__name__}")
        return {
            "status": "success",
            "variant": variant,
            "data": data,
        }

    except Exception as e:
        logger.error(f"Payload read failed: {str(e)}")
        raise
    finally:
        reset_request_id(token)


def validate_plan(plan_path: str) -> bool:
    """
    Validate a read plan file without reading any payload.

    Raises:
        Exception: If the plan is invalid
    """
    try:
        ReadPlan.model_validate(load_document(plan_path))
        logger.info(f"Read plan is valid: {plan_path}")
        return True
    except Exception as e:
        logger.error(f"Read plan validation failed: {str(e)}")
        raise


def cli(argv: Optional[list] = None) -> None:
    """
    Command-line interface for entitykit.

    Usage:
        entitykit read payload.json --plan plan.yaml
        entitykit read payload.yaml --variant record
        entitykit validate plan.yaml
    """
    parser = argparse.ArgumentParser(
        prog="entitykit",
        description="Typed field access over loosely structured payloads"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    read_parser = subparsers.add_parser(
        "read",
        help="Read a payload through an entity and print the result as JSON"
    )
    read_parser.add_argument(
        "payload",
        help="Path to payload file (JSON or YAML)"
    )
    read_parser.add_argument(
        "--plan",
        help="Path to read plan file (JSON or YAML)"
    )
    read_parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default="mapping",
        help="Entity variant backing the payload"
    )
    read_parser.add_argument(
        "--request-id",
        help="Id attached to log records"
    )
    read_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a read plan"
    )
    validate_parser.add_argument(
        "plan",
        help="Path to read plan file (JSON or YAML)"
    )

    args = parser.parse_args(argv)

    if args.command == "read":
        if args.verbose:
            configure_root_logger("DEBUG")
        try:
            result = main(
                payload_path=args.payload,
                plan=args.plan,
                variant=args.variant,
                request_id=args.request_id,
            )
            print(json.dumps(result["data"], default=_to_jsonable, indent=2))
        except Exception as e:
            logger.error(f"Read failed: {e}")
            sys.exit(1)
        sys.exit(0)

    elif args.command == "validate":
        try:
            validate_plan(args.plan)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()
