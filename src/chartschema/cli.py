from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .core.runtime.logging import log_event
from .core.schema_utils import dumps_schema, write_schema
from .errors import SchemaError
from .exit_codes import ERR_INTERNAL, OK
from .schema.options import SKIPPABLE_FIELDS, BuildOptions
from .schema.transform import generate_schema

DEFAULT_OUTPUT = "values.schema.json"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chartschema", description="generate a JSON Schema from an annotated values file")
    p.add_argument("--version", action="version", version=f"chartschema {__version__}")
    p.add_argument("--values", default="values.yaml", help="values file to read (default: values.yaml)")
    p.add_argument("--output", help=f"schema file to write (default: {DEFAULT_OUTPUT} next to the values file, `-` for stdout)")
    p.add_argument("--keep-full-comment", action="store_true", help="use every comment paragraph above a key")
    p.add_argument("--keep-helm-docs-prefix", action="store_true", help="keep helm-docs @tags and `--` prefixes")
    p.add_argument(
        "--skip-auto-generation",
        default="",
        help="comma separated fields not to fill in automatically: " + ", ".join(SKIPPABLE_FIELDS),
    )
    p.add_argument("--log-format", choices=["text", "json"], default=None, help="stderr log format")
    p.add_argument("--verbose", action="store_true", default=None, help="enable debug logging")
    return p


def render_error(*, as_json: bool, error: SchemaError) -> str:
    if not as_json:
        return f"error: {error}"
    return json.dumps(
        {
            "tool": "chartschema",
            "status": "error",
            "errors": [{"code": error.code, "kind": error.kind, "key_path": error.key_path, "message": error.message}],
        },
        sort_keys=True,
    )


def _output_path(values_path: Path, output: str | None) -> Path | None:
    if output == "-":
        return None
    if output:
        return Path(output)
    return values_path.parent / DEFAULT_OUTPUT


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    as_json = ns.log_format == "json"
    try:
        options = BuildOptions.from_args(
            keep_full_comment=ns.keep_full_comment,
            keep_helm_docs_prefix=ns.keep_helm_docs_prefix,
            skip_fields=ns.skip_auto_generation.split(","),
            log_format=ns.log_format,
            verbose=ns.verbose,
        )
        as_json = options.log_json
        values_path = Path(ns.values)
        payload = generate_schema(values_path, options).to_dict()
        out_path = _output_path(values_path, ns.output)
        if out_path is None:
            print(dumps_schema(payload))
        else:
            write_schema(out_path, payload)
            log_event(options, "info", "cli", "write", values=str(values_path), output=str(out_path))
        return OK
    except SchemaError as exc:
        print(render_error(as_json=as_json, error=exc), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(f"internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
