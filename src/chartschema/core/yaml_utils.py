"""Values file loading with access to the comments attached to mapping keys."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from ..errors import SchemaParseError

# Text allowed in front of a key on its own line: indentation and block sequence dashes.
_KEY_LEADER = re.compile(r"^[ \t]*(?:-[ \t]+)*$")


def content_end_mark(node: yaml.Node) -> yaml.Mark:
    """End mark of the last text that belongs to ``node``.

    A block collection ends where the next token starts, which is the line of
    the following key; descend to its last leaf instead.
    """
    while isinstance(node, (yaml.MappingNode, yaml.SequenceNode)) and not node.flow_style and node.value:
        last = node.value[-1]
        node = last[1] if isinstance(node, yaml.MappingNode) else last
    return node.end_mark


def read_text_fixed_newlines(path: Path) -> str:
    return path.read_text(encoding="utf-8").replace("\r\n", "\n")


@dataclass(frozen=True)
class ValuesDocument:
    path: Path
    root: yaml.Node | None
    lines: tuple[str, ...]

    def head_comment(self, key_node: yaml.Node, after: yaml.Mark | None = None) -> str:
        """Return the comment block written directly above ``key_node``.

        Comment lines are returned without indentation, blank lines between
        comment paragraphs are kept as empty lines. Keys that do not start
        their line (flow mappings) have no head comment. ``after`` is the end
        mark of the preceding sibling value, see :func:`content_end_mark`; lines up to it belong to that value
        (block scalars may contain lines starting with ``#``).
        """
        line_no = key_node.start_mark.line
        floor = -1
        if after is not None:
            floor = after.line if after.column > 0 else after.line - 1
        if line_no >= len(self.lines):
            return ""
        prefix = self.lines[line_no][: key_node.start_mark.column]
        if not _KEY_LEADER.match(prefix):
            return ""
        collected: list[str] = []
        for idx in range(line_no - 1, floor, -1):
            stripped = self.lines[idx].strip()
            if stripped and not stripped.startswith("#"):
                break
            collected.append(stripped)
        collected.reverse()
        while collected and not collected[0]:
            collected.pop(0)
        while collected and not collected[-1]:
            collected.pop()
        return "\n".join(collected)


def parse_values(text: str, path: Path) -> ValuesDocument:
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise SchemaParseError(f"invalid YAML in {path}: {exc}") from exc
    return ValuesDocument(path=path, root=root, lines=tuple(text.split("\n")))


def load_values(path: Path) -> ValuesDocument:
    try:
        text = read_text_fixed_newlines(path)
    except OSError as exc:
        raise SchemaParseError(f"cannot read values file {path}: {exc}") from exc
    return parse_values(text, path)
