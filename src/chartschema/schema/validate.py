from __future__ import annotations

from typing import TYPE_CHECKING

import jsonschema

from ..errors import SchemaValidationError

if TYPE_CHECKING:
    from .model import Schema

VALID_TYPES = frozenset({"object", "string", "integer", "number", "array", "null", "boolean"})

# https://json-schema.org/understanding-json-schema/reference/string.html#built-in-formats
SUPPORTED_FORMATS = frozenset(
    {
        "date-time",
        "time",
        "date",
        "duration",
        "email",
        "idn-email",
        "hostname",
        "idn-hostname",
        "ipv4",
        "ipv6",
        "uuid",
        "uri",
        "uri-reference",
        "iri",
        "iri-reference",
        "uri-template",
        "json-pointer",
        "relative-json-pointer",
        "regex",
    }
)


def check_draft07(payload: dict[str, object]) -> None:
    try:
        jsonschema.Draft7Validator.check_schema(payload)
    except jsonschema.SchemaError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise SchemaValidationError(f"invalid draft-07 schema at {loc}: {exc.message}") from exc


def validate_schema(schema: Schema) -> None:
    """Check ``schema`` against the draft-07 meta-schema, then the semantic rules.

    The first violated rule raises :class:`SchemaValidationError`.
    """
    check_draft07(schema.to_dict())
    kinds = schema.type
    untyped = kinds.is_empty()
    shown = kinds.to_json() if kinds else ""

    for kind in kinds:
        if kind and kind not in VALID_TYPES:
            raise SchemaValidationError(f"unsupported type {kind}")
    if schema.pattern and not untyped and not kinds.matches("string"):
        raise SchemaValidationError(f"cant use pattern if type is {shown}. Use type=string")
    if schema.format and not untyped and not kinds.matches("string"):
        raise SchemaValidationError(f"cant use format if type is {shown}. Use type=string")
    if schema.min_length is not None and schema.max_length is not None and schema.min_length > schema.max_length:
        raise SchemaValidationError("cant use minLength > maxLength")
    if schema.format and schema.pattern:
        raise SchemaValidationError("cant use format and pattern option at the same time")
    if schema.items is not None:
        validate_schema(schema.items)
        if not untyped and not kinds.matches("array"):
            raise SchemaValidationError(f"cant use items if type is {shown}. Use type=array")
    if schema.const is not None and not untyped:
        raise SchemaValidationError("if you are using const, you cant use type")
    if schema.enum is not None and not untyped:
        raise SchemaValidationError("if you are using enum, you cant use type")
    if schema.format and schema.format not in SUPPORTED_FORMATS:
        raise SchemaValidationError(f"the format {schema.format} is not supported")
    non_numeric = not untyped and not kinds.matches("number") and not kinds.matches("integer")
    for keyword, value in (
        ("minimum", schema.minimum),
        ("maximum", schema.maximum),
        ("exclusiveMinimum", schema.exclusive_minimum),
        ("exclusiveMaximum", schema.exclusive_maximum),
        ("multipleOf", schema.multiple_of),
    ):
        if value is not None and non_numeric:
            raise SchemaValidationError(f"if you use {keyword}, you cant use type={shown}")
    if schema.multiple_of is not None and schema.multiple_of <= 0:
        raise SchemaValidationError("multipleOf must be greater than 0")
    if schema.minimum is not None and schema.exclusive_minimum is not None:
        raise SchemaValidationError("you cant set minimum and exclusiveMinimum")
    if schema.maximum is not None and schema.exclusive_maximum is not None:
        raise SchemaValidationError("you cant set maximum and exclusiveMaximum")
