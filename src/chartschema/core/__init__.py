"""Chartschema core package."""
from .runtime.logging import log_event, utc_now_iso
from .schema_utils import dumps_schema, load_document, load_json, write_schema
from .yaml_utils import ValuesDocument, load_values, parse_values

__all__ = [
    "ValuesDocument",
    "dumps_schema",
    "load_document",
    "load_json",
    "load_values",
    "log_event",
    "parse_values",
    "utc_now_iso",
    "write_schema",
]
