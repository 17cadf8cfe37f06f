from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from chartschema.cli import main
from chartschema.exit_codes import ERR_PARSE, ERR_USAGE, ERR_VALIDATION, OK


def test_writes_schema_next_to_values(write_values: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
    values = write_values("replicaCount: 3\n", name="chart/values.yaml")
    assert main(["--values", str(values)]) == OK
    written = json.loads((values.parent / "values.schema.json").read_text(encoding="utf-8"))
    assert written["properties"]["replicaCount"]["default"] == 3
    err = capsys.readouterr().err
    assert "component=cli action=write" in err


def test_output_to_stdout(write_values: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
    values = write_values("name: demo\n")
    assert main(["--values", str(values), "--output", "-", "--skip-auto-generation", "title,default"]) == OK
    out = json.loads(capsys.readouterr().out)
    assert out["properties"]["name"] == {"$id": "#/properties/name", "type": "string"}
    assert not (values.parent / "values.schema.json").exists()


def test_explicit_output_path(write_values: Callable[..., Path], tmp_path: Path) -> None:
    values = write_values("a: 1\n")
    target = tmp_path / "out" / "schema.json"
    assert main(["--values", str(values), "--output", str(target)]) == OK
    assert json.loads(target.read_text(encoding="utf-8"))["required"] == ["a"]


def test_bad_skip_field_is_usage_error(write_values: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
    values = write_values("a: 1\n")
    assert main(["--values", str(values), "--skip-auto-generation", "nope"]) == ERR_USAGE
    assert capsys.readouterr().err.startswith("error: unsupported field names 'nope'")


def test_missing_values_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--values", str(tmp_path / "absent.yaml")]) == ERR_PARSE
    assert "cannot read values file" in capsys.readouterr().err


def test_validation_error_rendered_as_json(write_values: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
    values = write_values(
        """
        # @schema
        # type: string
        # minLength: 5
        # maxLength: 2
        # @schema
        name: demo
        """
    )
    assert main(["--values", str(values), "--log-format", "json"]) == ERR_VALIDATION
    payload = json.loads(capsys.readouterr().err)
    assert payload["status"] == "error"
    [error] = payload["errors"]
    assert error["kind"] == "validation_error"
    assert error["key_path"] == "#/properties/name"
    assert error["code"] == ERR_VALIDATION
