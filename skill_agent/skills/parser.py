"""Parse skill documents: a `---` delimited key/value front block + Markdown body."""
import json
from typing import Any

import yaml

from skill_agent.skills.types import SkillMetadata

# Front block opens the document and ends at the first line that is exactly the marker
_MARKER = "---"

# Plain string fields; `metadata` is handled separately
_STRING_FIELDS = ("name", "description", "homepage")


class MalformedDocument(ValueError):
    """Raised when a skill document has no well-formed front block."""


def _strip_quotes(value: str) -> str:
    """Remove one matching pair of surrounding single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_metadata_literal(value: str) -> dict[str, Any]:
    """Parse the inline `metadata` literal. Returns {} if it is not a mapping."""
    try:
        data = yaml.safe_load(value)
    except (yaml.YAMLError, ValueError):
        # Constructors raise plain ValueError for impossible values, e.g. 2024-13-45
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def split_front_block(raw: str) -> tuple[str, str]:
    """Split a document into (front block text, body). Raises MalformedDocument."""
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != _MARKER:
        raise MalformedDocument("document does not start with a '---' line")

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].rstrip("\r\n") == _MARKER:
            end_idx = i
            break

    if end_idx is None:
        raise MalformedDocument("front block has no closing '---' line")

    block = "".join(lines[1:end_idx]).rstrip("\r\n")
    if not block:
        raise MalformedDocument("front block is empty")
    return block, "".join(lines[end_idx + 1 :])


def parse_document(raw: str) -> tuple[SkillMetadata, str]:
    """Parse raw document text into (SkillMetadata, body).

    Each front-block line is split at its first colon. The `metadata` key holds a
    JSON-like literal; every other recognized key is a plain string. Unknown keys,
    blank lines and lines without a colon are skipped. The body is returned verbatim.
    """
    block, body = split_front_block(raw)
    fields: dict[str, Any] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue
        if key == "metadata":
            fields["metadata"] = _parse_metadata_literal(value)
        elif key in _STRING_FIELDS:
            fields[key] = _strip_quotes(value)
    return SkillMetadata(**fields), body


def render_front_block(metadata: SkillMetadata) -> str:
    """Serialize metadata back into a front block (inverse of parse_document for known keys)."""
    lines = ["---"]
    for key in _STRING_FIELDS:
        value = getattr(metadata, key)
        if value:
            lines.append(f"{key}: {value}")
    if metadata.metadata:
        lines.append("metadata: " + json.dumps(dict(metadata.metadata), ensure_ascii=False))
    lines.append("---")
    return "\n".join(lines) + "\n"
