from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from entitykit.core.base_entity import BaseEntity
from entitykit.core.exceptions import MissingFieldHandler
from entitykit.core.logger import get_logger
from entitykit.models.read_plan import FieldRule, ReadPlan

logger = get_logger(__name__)


def read_field(entity: BaseEntity, rule: FieldRule) -> Any:
    """Read one field through the nullable accessor named by ``rule.type``."""
    if rule.type == "enum":
        return entity.nullable_enum(rule.name, rule.enum)
    accessor = getattr(entity, f"nullable_{rule.type}")
    return accessor(rule.name)


def read_entity(
    entity: BaseEntity,
    plan: Union[ReadPlan, Mapping[str, Any]],
    *,
    handler: MissingFieldHandler | None = None,
) -> Dict[str, Any]:
    """Apply a read plan to an entity and return the coerced values by output key.

    Required fields that yield no value go through the plan's missing-field
    policy; with the default ``fail`` policy the first one raises
    ``RequiredFieldMissingError``.
    """
    if not isinstance(plan, ReadPlan):
        plan = ReadPlan.model_validate(plan)
    handler = handler or MissingFieldHandler(policy=plan.policy, logger=logger)

    result: Dict[str, Any] = {}
    missing = 0
    for rule in plan.fields:
        value = read_field(entity, rule)
        if value is None and rule.required:
            missing += 1
            handler.handle(rule.name)
        result[rule.output_key] = value

    logger.debug(f"Read {len(result)} field(s) from {entity.__class__.__name__}, {missing} required missing")
    return result
