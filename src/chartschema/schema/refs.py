from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..core.runtime.logging import log_event
from ..core.schema_utils import load_document
from ..errors import SchemaParseError, SchemaReferenceError
from .model import Schema
from .options import BuildOptions


def split_ref(ref: str) -> tuple[str, str | None]:
    """Split ``path#pointer`` on the first ``#``; the pointer is ``None`` when absent."""
    path, sep, pointer = ref.partition("#")
    return path, (pointer if sep else None)


def _decode_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def resolve_pointer(document: Any, pointer: str, *, context: str) -> Any:
    """Return the value addressed by an RFC 6901 ``pointer``; ``""`` is the whole document."""
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        raise SchemaReferenceError(f"unsupported JSON pointer '{pointer}' in {context} (expected '' or '/...')")
    current = document
    for raw_token in pointer[1:].split("/"):
        token = _decode_pointer_token(raw_token)
        if isinstance(current, dict):
            if token not in current:
                raise SchemaReferenceError(f"key '{token}' not found while resolving pointer in {context}")
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or int(token) >= len(current):
                raise SchemaReferenceError(f"list index '{token}' invalid while resolving pointer in {context}")
            current = current[int(token)]
        else:
            raise SchemaReferenceError(f"cannot dereference through non-container while resolving pointer in {context}")
    return current


def relative_ref_file(values_path: Path, ref_path: str) -> Path | None:
    """Return the referenced file next to the values file, or ``None`` when it cannot be loaded here."""
    if not ref_path or "://" in ref_path or Path(ref_path).is_absolute():
        return None
    candidate = values_path.parent / ref_path
    if not candidate.is_file():
        return None
    return candidate


def resolve_reference(schema: Schema, values_path: Path, options: BuildOptions) -> Schema:
    """Replace ``schema`` by the relative file its ``$ref`` points at.

    Local fragments, absolute paths, URLs and missing files are left to the
    consumer of the generated schema: ``schema`` is returned unchanged.
    """
    ref_path, pointer = split_ref(schema.ref)
    target = relative_ref_file(values_path, ref_path)
    if target is None:
        log_event(options, "debug", "refs", "skip", ref=schema.ref, values=str(values_path))
        return schema

    context = f"$ref '{schema.ref}' from {values_path}"
    try:
        document = load_document(target)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SchemaReferenceError(f"cannot load {context}: {exc}") from exc
    if pointer is not None:
        document = resolve_pointer(document, pointer, context=context)
    if not isinstance(document, dict):
        raise SchemaReferenceError(f"{context} does not resolve to a schema object")
    try:
        resolved = Schema.from_mapping(document)
    except SchemaParseError as exc:
        raise SchemaReferenceError(f"cannot decode {context}: {exc.message}") from exc
    resolved.mark()
    log_event(options, "debug", "refs", "resolve", ref=schema.ref, file=str(target))
    return resolved
