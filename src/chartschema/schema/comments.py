"""``@schema`` annotation parsing and description clean-up for key comments."""

from __future__ import annotations

import re

import yaml

from ..errors import SchemaParseError
from .model import Schema

SCHEMA_MARKER = "# @schema"
COMMENT_PREFIX = "#"

_LEADING_COMMENTS = re.compile(r"(?:.*\n{2,})+", re.MULTILINE | re.DOTALL)
# helm-docs tag lines such as ``# @default -- value`` or ``# @ignored``
_HELM_DOCS_TAGS = re.compile(r"(\r\n|\r|\n)?\s*@\w+(\s+--\s)?[^\n\r]*", re.MULTILINE | re.DOTALL)
_HELM_DOCS_PREFIX = re.compile(r"^--\s?", re.MULTILINE)


def remove_leading_comments(comment: str) -> str:
    """Keep only the last paragraph of a multi-paragraph head comment."""
    return _LEADING_COMMENTS.sub("", comment)


def remove_helm_docs_tags(description: str) -> str:
    description = _HELM_DOCS_TAGS.sub("", description)
    return _HELM_DOCS_PREFIX.sub("", description)


def get_schema_from_comment(comment: str) -> tuple[Schema, str]:
    """Split ``comment`` into the decoded ``@schema`` block and the free-text description.

    Lines between two ``# @schema`` markers are decoded as a YAML schema
    document and mark the result as explicitly authored; every other line
    contributes to the description. An unclosed block or an undecodable
    document raises :class:`SchemaParseError`.
    """
    description: list[str] = []
    raw_schema: list[str] = []
    inside = False
    has_data = False

    for line in comment.splitlines():
        if line.rstrip() == SCHEMA_MARKER:
            inside = not inside
            continue
        if inside:
            content = line.removeprefix(COMMENT_PREFIX).removeprefix(COMMENT_PREFIX)
            raw_schema.append(content.removeprefix(" "))
            has_data = True
        else:
            description.append(line.removeprefix(COMMENT_PREFIX).removeprefix(" "))

    if inside:
        raise SchemaParseError(f"unclosed schema block found in comment: {comment}")

    try:
        document = yaml.safe_load("\n".join(raw_schema))
    except yaml.YAMLError as exc:
        raise SchemaParseError(f"invalid @schema block: {exc}") from exc
    schema = Schema.from_mapping(document)
    if has_data:
        schema.mark()
    return schema, "\n".join(description)
