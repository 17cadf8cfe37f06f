from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chartschema.errors import UnsupportedTagError
from chartschema.schema.types import type_from_tag

_EXPECTED = {
    "null": "null",
    "bool": "boolean",
    "str": "string",
    "int": "integer",
    "float": "number",
    "timestamp": "string",
    "seq": "array",
    "map": "object",
}


@pytest.mark.parametrize(("short", "expected"), sorted(_EXPECTED.items()))
def test_long_and_short_tags_map_to_schema_types(short: str, expected: str) -> None:
    assert type_from_tag(f"tag:yaml.org,2002:{short}") == expected
    assert type_from_tag(f"!!{short}") == expected


@pytest.mark.parametrize("tag", ["tag:yaml.org,2002:binary", "!!set", "!custom", "tag:example.com,2020:thing"])
def test_unsupported_tags_fail(tag: str) -> None:
    with pytest.raises(UnsupportedTagError) as exc:
        type_from_tag(tag)
    assert tag in str(exc.value)


@given(st.text(min_size=1, max_size=20).filter(lambda s: s not in _EXPECTED))
def test_unknown_short_tags_never_default(name: str) -> None:
    with pytest.raises(UnsupportedTagError):
        type_from_tag(f"!!{name}")
