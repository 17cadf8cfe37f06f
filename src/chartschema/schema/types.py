from __future__ import annotations

from ..errors import UnsupportedTagError

YAML_TAG_PREFIX = "tag:yaml.org,2002:"

_TAG_TYPES = {
    "null": "null",
    "bool": "boolean",
    "str": "string",
    "int": "integer",
    "float": "number",
    "timestamp": "string",
    "seq": "array",
    "map": "object",
}


def short_tag(tag: str) -> str:
    if tag.startswith(YAML_TAG_PREFIX):
        return tag[len(YAML_TAG_PREFIX) :]
    if tag.startswith("!!"):
        return tag[2:]
    return tag


def type_from_tag(tag: str) -> str:
    """Map a YAML core tag (long or ``!!`` short form) to a JSON Schema type name."""
    try:
        return _TAG_TYPES[short_tag(tag)]
    except KeyError:
        raise UnsupportedTagError(f"unsupported yaml tag found: {tag}") from None
