"""In-memory JSON Schema node.

A :class:`Schema` is decoded from an ``@schema`` annotation block or a
referenced schema file, completed by the values-tree transformer and rendered
with :meth:`Schema.to_dict`. Custom ``x-`` annotations live in a side mapping
and are merged into the rendered structure only at serialization time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from ..errors import SchemaParseError
from .validate import validate_schema

DRAFT_07_URI = "http://json-schema.org/draft-07/schema#"
CUSTOM_ANNOTATION_PREFIX = "x-"


class TypeList(list):
    """JSON Schema ``type``: one or more type names, rendered as a string when single."""

    @classmethod
    def from_value(cls, value: Any) -> TypeList:
        if isinstance(value, list):
            return cls("null" if item is None else str(item) for item in value)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return cls([str(value)])
        raise SchemaParseError(f"invalid value for 'type': expected string or list, got {value!r}")

    def is_empty(self) -> bool:
        return not self or any(item == "" for item in self)

    def matches(self, type_name: str) -> bool:
        return type_name in self

    def to_json(self) -> str | list[str]:
        if len(self) == 1:
            return self[0]
        return list(self)


@dataclass(frozen=True)
class RequiredMarker:
    """Per-key ``required: true|false``: whether the enclosing object must list this key."""

    flag: bool


@dataclass
class RequiredNames:
    """Standard ``required`` array: names of child properties, first-seen order."""

    names: list[str] = field(default_factory=list)

    def add(self, name: str) -> None:
        if name not in self.names:
            self.names.append(name)


Required = Union[RequiredMarker, RequiredNames]


@dataclass(eq=False)
class Schema:
    type: TypeList = field(default_factory=TypeList)
    title: str = ""
    description: str = ""
    default: Any = None
    const: Any = None
    enum: list[Any] | None = None
    examples: list[Any] | None = None
    pattern: str = ""
    format: str = ""
    min_length: int | None = None
    max_length: int | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    exclusive_maximum: int | float | None = None
    multiple_of: int | float | None = None
    any_of: list[Schema] | None = None
    all_of: list[Schema] | None = None
    one_of: list[Schema] | None = None
    not_: Schema | None = None
    if_: Schema | None = None
    then: Schema | None = None
    else_: Schema | None = None
    properties: dict[str, Schema] | None = None
    pattern_properties: dict[str, Schema] | None = None
    items: Schema | None = None
    additional_properties: bool | Schema | None = None
    required: Required | None = None
    ref: str = ""
    schema: str = ""
    id: str = ""
    deprecated: bool = False
    read_only: bool = False
    write_only: bool = False
    dependencies: dict[str, Any] | None = None
    custom_annotations: dict[str, Any] = field(default_factory=dict)
    has_data: bool = False

    @classmethod
    def of_type(cls, type_name: str) -> Schema:
        if not type_name:
            return cls()
        return cls(type=TypeList([type_name]), required=RequiredNames())

    @classmethod
    def from_mapping(cls, data: Any) -> Schema:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise SchemaParseError(f"schema must be a mapping, got {type(data).__name__}")
        schema = cls()
        for raw_key, value in data.items():
            key = str(raw_key)
            decoder = _DECODERS.get(key)
            if decoder is not None:
                if value is None:
                    continue
                attr, convert = decoder
                setattr(schema, attr, convert(key, value))
            elif key.startswith(CUSTOM_ANNOTATION_PREFIX):
                schema.custom_annotations[key] = value
        return schema

    def mark(self) -> None:
        self.has_data = True

    @property
    def required_flag(self) -> bool | None:
        if isinstance(self.required, RequiredMarker):
            return self.required.flag
        return None

    @property
    def required_names(self) -> list[str]:
        if isinstance(self.required, RequiredNames):
            return self.required.names
        return []

    def ensure_required_names(self) -> RequiredNames:
        """Switch ``required`` to its name-list form, dropping a per-key marker."""
        if not isinstance(self.required, RequiredNames):
            self.required = RequiredNames()
        return self.required

    def validate(self) -> None:
        validate_schema(self)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.schema:
            out["$schema"] = self.schema
        if self.id:
            out["$id"] = self.id
        if self.ref:
            out["$ref"] = self.ref
        if self.title:
            out["title"] = self.title
        if self.description:
            out["description"] = self.description
        if self.type:
            out["type"] = self.type.to_json()
        if self.default is not None:
            out["default"] = self.default
        if self.const is not None:
            out["const"] = self.const
        if self.enum:
            out["enum"] = list(self.enum)
        if self.examples:
            out["examples"] = list(self.examples)
        if self.pattern:
            out["pattern"] = self.pattern
        if self.format:
            out["format"] = self.format
        for key, value in (
            ("minLength", self.min_length),
            ("maxLength", self.max_length),
            ("minimum", self.minimum),
            ("exclusiveMinimum", self.exclusive_minimum),
            ("maximum", self.maximum),
            ("exclusiveMaximum", self.exclusive_maximum),
            ("multipleOf", self.multiple_of),
        ):
            if value is not None:
                out[key] = value
        if self.deprecated:
            out["deprecated"] = True
        if self.read_only:
            out["readOnly"] = True
        if self.write_only:
            out["writeOnly"] = True
        for key, child in (("if", self.if_), ("then", self.then), ("else", self.else_), ("not", self.not_)):
            if child is not None:
                out[key] = child.to_dict()
        for key, members in (("anyOf", self.any_of), ("allOf", self.all_of), ("oneOf", self.one_of)):
            if members:
                out[key] = [member.to_dict() for member in members]
        if self.properties:
            out["properties"] = {name: child.to_dict() for name, child in self.properties.items()}
        if self.pattern_properties:
            out["patternProperties"] = {name: child.to_dict() for name, child in self.pattern_properties.items()}
        if isinstance(self.additional_properties, Schema):
            out["additionalProperties"] = self.additional_properties.to_dict()
        elif self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.required_names:
            out["required"] = list(self.required_names)
        if self.dependencies:
            out["dependencies"] = self.dependencies
        out.update(self.custom_annotations)
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False, default=str)


def _invalid(key: str, expected: str, value: Any) -> SchemaParseError:
    return SchemaParseError(f"invalid value for '{key}': expected {expected}, got {value!r}")


def _as_str(key: str, value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise _invalid(key, "string", value)
    return str(value)


def _as_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _invalid(key, "boolean", value)
    return value


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(key, "integer", value)
    return value


def _as_number(key: str, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid(key, "number", value)
    return value


def _as_list(key: str, value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise _invalid(key, "list", value)
    return list(value)


def _as_mapping(key: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _invalid(key, "mapping", value)
    return dict(value)


def _as_any(_key: str, value: Any) -> Any:
    return value


def _as_schema(key: str, value: Any) -> Schema:
    if not isinstance(value, dict):
        raise _invalid(key, "schema mapping", value)
    return Schema.from_mapping(value)


def _as_schema_list(key: str, value: Any) -> list[Schema]:
    return [_as_schema(key, item) for item in _as_list(key, value)]


def _as_schema_map(key: str, value: Any) -> dict[str, Schema]:
    return {str(name): _as_schema(f"{key}.{name}", child) for name, child in _as_mapping(key, value).items()}


def _as_type(_key: str, value: Any) -> TypeList:
    return TypeList.from_value(value)


def _as_required(key: str, value: Any) -> Required:
    if isinstance(value, bool):
        return RequiredMarker(value)
    names = RequiredNames()
    for item in _as_list(key, value):
        names.add(_as_str(key, item))
    return names


def _as_additional_properties(key: str, value: Any) -> bool | Schema:
    if isinstance(value, bool):
        return value
    return _as_schema(key, value)


_DECODERS: dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "additionalProperties": ("additional_properties", _as_additional_properties),
    "default": ("default", _as_any),
    "then": ("then", _as_schema),
    "patternProperties": ("pattern_properties", _as_schema_map),
    "properties": ("properties", _as_schema_map),
    "if": ("if_", _as_schema),
    "minimum": ("minimum", _as_number),
    "multipleOf": ("multiple_of", _as_number),
    "exclusiveMaximum": ("exclusive_maximum", _as_number),
    "items": ("items", _as_schema),
    "exclusiveMinimum": ("exclusive_minimum", _as_number),
    "maximum": ("maximum", _as_number),
    "else": ("else_", _as_schema),
    "pattern": ("pattern", _as_str),
    "const": ("const", _as_any),
    "$ref": ("ref", _as_str),
    "$schema": ("schema", _as_str),
    "$id": ("id", _as_str),
    "format": ("format", _as_str),
    "description": ("description", _as_str),
    "title": ("title", _as_str),
    "type": ("type", _as_type),
    "anyOf": ("any_of", _as_schema_list),
    "allOf": ("all_of", _as_schema_list),
    "oneOf": ("one_of", _as_schema_list),
    "examples": ("examples", _as_list),
    "enum": ("enum", _as_list),
    "deprecated": ("deprecated", _as_bool),
    "readOnly": ("read_only", _as_bool),
    "writeOnly": ("write_only", _as_bool),
    "required": ("required", _as_required),
    "not": ("not_", _as_schema),
    "dependencies": ("dependencies", _as_mapping),
    "minLength": ("min_length", _as_int),
    "maxLength": ("max_length", _as_int),
}
