"""Declarative read plans: which entity fields to read, and as which types.

Plans are plain JSON/YAML documents validated with pydantic, e.g.::

    missing_policy: warn
    fields:
      - {name: user_id, type: int, required: true}
      - {name: status, type: enum, enum: OrderStatus}
      - {name: meta, type: object, alias: metadata}
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from entitykit.core.exceptions import MissingFieldPolicy

FieldType = Literal["string", "int", "float", "bool", "array", "object", "enum"]


class FieldRule(BaseModel):
    name: str = Field(min_length=1)
    type: FieldType = "string"
    required: bool = False

    # Registered decoder name; only meaningful for type == "enum".
    enum: Optional[str] = None

    # Output key; defaults to the field name.
    alias: Optional[str] = None

    @model_validator(mode="after")
    def _validate_enum(self) -> "FieldRule":
        if self.type == "enum" and not self.enum:
            raise ValueError(f"enum is required when type is 'enum' (field {self.name!r})")
        if self.type != "enum" and self.enum:
            raise ValueError(f"enum is only valid when type is 'enum' (field {self.name!r})")
        return self

    @property
    def output_key(self) -> str:
        return self.alias or self.name


class ReadPlan(BaseModel):
    fields: List[FieldRule] = Field(min_length=1)
    missing_policy: Literal["fail", "warn", "allow"] = "fail"

    @model_validator(mode="after")
    def _validate_unique_output_keys(self) -> "ReadPlan":
        seen = set()
        for rule in self.fields:
            if rule.output_key in seen:
                raise ValueError(f"duplicate output key {rule.output_key!r} in read plan")
            seen.add(rule.output_key)
        return self

    @property
    def policy(self) -> MissingFieldPolicy:
        return MissingFieldPolicy(self.missing_policy)
