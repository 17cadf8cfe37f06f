from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_INTERNAL, ERR_PARSE, ERR_USAGE, ERR_VALIDATION


@dataclass
class SchemaError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"
    key_path: str | None = None

    def __str__(self) -> str:
        if self.key_path:
            return f"{self.key_path}: {self.message}"
        return self.message


@dataclass
class SchemaParseError(SchemaError):
    code: int = ERR_PARSE
    kind: str = "parse_error"


@dataclass
class UnsupportedTagError(SchemaError):
    code: int = ERR_PARSE
    kind: str = "unsupported_tag"


@dataclass
class SchemaReferenceError(SchemaError):
    code: int = ERR_PARSE
    kind: str = "reference_error"


@dataclass
class SchemaValidationError(SchemaError):
    code: int = ERR_VALIDATION
    kind: str = "validation_error"


@dataclass
class ConfigError(SchemaError):
    code: int = ERR_USAGE
    kind: str = "config_error"
