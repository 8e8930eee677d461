"""Documentation comment parsing for props and components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .source import DocComment

_TAG_LINE = re.compile(r"^@(\w+)\s*(.*)$")
_KEY_VALUE_LINE = re.compile(r"^(\w+)\s*:\s*(.+)$")
_LINE_PREFIX = re.compile(r"^\s*\*(?!/) ?")


@dataclass
class DocBlock:
    """Description and tags recovered from the comments on one declaration."""

    description: str = ""
    tags: Dict[str, str] = field(default_factory=dict)


def parse_jsdoc(text: str) -> DocBlock:
    """Parse a ``/** ... */`` block into description text and ``@tag`` values.

    A tag runs until the next tag line; continuation lines are kept so multi-line
    ``@example`` blocks survive. Tags without text get the value ``"true"``.
    """
    description_lines: List[str] = []
    tags: Dict[str, str] = {}
    current_name = ""
    current_lines: List[str] = []

    def _close_tag() -> None:
        if current_name:
            tags[current_name] = "\n".join(current_lines).strip() or "true"

    for line in _comment_lines(text):
        match = _TAG_LINE.match(line.strip())
        if match:
            _close_tag()
            current_name, current_lines = match.group(1), [match.group(2)]
        elif current_name:
            current_lines.append(line)
        else:
            description_lines.append(line)
    _close_tag()

    return DocBlock(description="\n".join(description_lines).strip(), tags=tags)


def parse_plain_comment(text: str) -> DocBlock:
    """Parse unstructured comments using the ``key: value`` line convention."""
    tags: Dict[str, str] = {}
    description_lines: List[str] = []
    for line in _comment_lines(text):
        stripped = line.strip()
        tag = _TAG_LINE.match(stripped)
        if tag:
            tags[tag.group(1)] = tag.group(2).strip() or "true"
            continue
        pair = _KEY_VALUE_LINE.match(stripped)
        if pair:
            tags[pair.group(1)] = pair.group(2).strip()
            continue
        description_lines.append(stripped)
    description = tags.get("description") or "\n".join(description_lines).strip()
    return DocBlock(description=description, tags=tags)


def parse_member_docs(comments: Sequence[DocComment]) -> DocBlock:
    """Combine the comments attached to a declaration member.

    Structured JSDoc wins when present; plain comments are only consulted when
    the member has no JSDoc block at all.
    """
    jsdocs = [comment for comment in comments if comment.is_jsdoc]
    if jsdocs:
        merged = DocBlock()
        for comment in jsdocs:
            block = parse_jsdoc(comment.text)
            merged.tags.update(block.tags)
            if not merged.description:
                merged.description = block.description
        if not merged.description:
            merged.description = merged.tags.get("description", "")
        return merged
    if comments:
        return parse_plain_comment("\n".join(comment.text for comment in comments))
    return DocBlock()


def jsdoc_description(comments: Sequence[DocComment]) -> str:
    """Return the description of the JSDoc block closest to a declaration."""
    for comment in reversed(comments):
        if comment.is_jsdoc:
            block = parse_jsdoc(comment.text)
            return block.description or block.tags.get("description", "")
    return ""


def _comment_lines(text: str) -> List[str]:
    stripped = text.strip()
    if stripped.startswith("/*"):
        stripped = stripped[2:]
        if stripped.startswith("*"):
            stripped = stripped[1:]
        if stripped.endswith("*/"):
            stripped = stripped[:-2]
        return [_LINE_PREFIX.sub("", line) for line in stripped.splitlines()]
    lines = []
    for line in stripped.splitlines():
        line = line.strip()
        if line.startswith("//"):
            line = line[2:].lstrip("/")
            line = line[1:] if line.startswith(" ") else line
        lines.append(line)
    return lines


__all__ = ["DocBlock", "jsdoc_description", "parse_jsdoc", "parse_member_docs", "parse_plain_comment"]
