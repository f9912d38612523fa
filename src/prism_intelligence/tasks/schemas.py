"""Input/output validators for tasks.

A task declares its schemas as pydantic models (or any type pydantic can
validate). Anything with a `validate(raw)` method that raises
`SchemaValidationError` works as well.
"""

from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar, cast, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from prism_intelligence.errors import SchemaValidationError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Validator(Protocol[T_co]):
    """Turns a raw value into a typed one or rejects it."""

    def validate(self, raw: object) -> T_co: ...


def describe_validation_error(error: ValidationError) -> str:
    """Collapse a pydantic error into one line, e.g. `prompt: Field required`."""
    parts: list[str] = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        msg = item.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or str(error)


class SchemaValidator(Generic[T]):
    """Validator backed by a pydantic `TypeAdapter`."""

    def __init__(self, schema: type[T] | Any) -> None:
        self.schema = schema
        self._adapter: TypeAdapter[T] = TypeAdapter(schema)

    def validate(self, raw: object) -> T:
        try:
            return self._adapter.validate_python(raw)
        except ValidationError as e:
            raise SchemaValidationError(describe_validation_error(e)) from e

    def json_schema(self) -> dict[str, Any]:
        return self._adapter.json_schema()


def as_validator(schema: object) -> Validator[Any]:
    """Accept either a ready validator or a schema type to wrap."""
    if isinstance(schema, SchemaValidator):
        return schema
    if not isinstance(schema, type) and isinstance(schema, Validator):
        return cast(Validator[Any], schema)
    return SchemaValidator(schema)


def json_schema_of(schema: object) -> dict[str, Any] | None:
    """JSON schema for introspection, when the validator can describe itself."""
    validator = as_validator(schema)
    describe = getattr(validator, "json_schema", None)
    if callable(describe):
        return cast(dict[str, Any], describe())
    return None
