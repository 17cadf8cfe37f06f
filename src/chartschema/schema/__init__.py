"""Values-file to JSON Schema generation APIs."""

from .comments import get_schema_from_comment, remove_helm_docs_tags, remove_leading_comments
from .model import DRAFT_07_URI, RequiredMarker, RequiredNames, Schema, TypeList
from .options import BuildOptions, SkipAutoGenerationConfig
from .refs import resolve_reference
from .required import fix_required_properties
from .transform import build_schema, generate_schema, yaml_to_schema
from .types import type_from_tag
from .validate import validate_schema

__all__ = [
    "DRAFT_07_URI",
    "BuildOptions",
    "RequiredMarker",
    "RequiredNames",
    "Schema",
    "SkipAutoGenerationConfig",
    "TypeList",
    "build_schema",
    "fix_required_properties",
    "generate_schema",
    "get_schema_from_comment",
    "remove_helm_docs_tags",
    "remove_leading_comments",
    "resolve_reference",
    "type_from_tag",
    "validate_schema",
    "yaml_to_schema",
]
