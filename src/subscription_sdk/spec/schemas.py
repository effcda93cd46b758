from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

import jsonschema

SCHEMA_ROOT = Path(__file__).resolve().parent / "v1"

MANAGER_OBJECT = "manager_object.schema.json"
CLOCK_OBJECT = "clock_object.schema.json"
SUBSCRIPTION_FIELD = "subscription_field.schema.json"
SUBSCRIPTION_EVENT = "subscription_event.schema.json"


@dataclass(frozen=True)
class Parsed:
    value: Any


@dataclass(frozen=True)
class Invalid:
    schema: str
    errors: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.errors) or "invalid content"


ParseResult = Union[Parsed, Invalid]


@lru_cache(maxsize=16)
def _validator(schema_root: Path, schema_filename: str) -> jsonschema.Validator:
    with (schema_root / schema_filename).open("r", encoding="utf-8") as f:
        schema = json.load(f)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


@dataclass(frozen=True)
class SchemaRegistry:
    schema_root: Path

    @classmethod
    def default(cls) -> "SchemaRegistry":
        return cls(schema_root=SCHEMA_ROOT)

    def schema_path(self, schema_filename: str) -> Path:
        return self.schema_root / schema_filename

    def validator_for(self, schema_filename: str) -> jsonschema.Validator:
        return _validator(self.schema_root, schema_filename)

    def errors_for(self, instance: Any, schema_filename: str) -> list[str]:
        validator = self.validator_for(schema_filename)
        errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
        return [self._format_error(err) for err in errors]

    def parse(self, instance: Any, schema_filename: str) -> ParseResult:
        """Validate and tag: Parsed(instance) when it matches, Invalid(errors) otherwise."""
        errors = self.errors_for(instance, schema_filename)
        if errors:
            return Invalid(schema=schema_filename, errors=errors)
        return Parsed(instance)

    @staticmethod
    def _format_error(error: jsonschema.ValidationError) -> str:
        location = "/".join(str(part) for part in error.path) or "<root>"
        return f"{location}: {error.message}"
