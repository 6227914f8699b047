"""Parse and serialize the stored document shapes.

Two shapes exist on disk:

- front-matter documents (legacy): a YAML block between ``---`` lines
  followed by free text, all in one file
- split pairs (current): a pure ``metadata.yml`` plus a markdown file whose
  ``# `` heading carries the title and whose remainder is the body
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any

import yaml

from mkanban.errors import ParseError

DELIMITER = "---"


@dataclass
class Document:
    """Parsed key/value block plus free-text body.

    The accessors never raise: a missing key or a value of the wrong type
    gives the zero value, and callers apply their own required-field checks.
    """

    meta: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    def get_str(self, key: str) -> str:
        value = self.meta.get(key)
        return value if isinstance(value, str) else ""

    def get_int(self, key: str) -> int:
        value = self.meta.get(key)
        if isinstance(value, bool):
            return 0
        if isinstance(value, (int, float)):
            return int(value)
        return 0

    def get_list(self, key: str) -> list[str]:
        value = self.meta.get(key)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    def get_dict(self, key: str) -> dict[str, str]:
        value = self.meta.get(key)
        if not isinstance(value, dict):
            return {}
        return {str(k): "" if v is None else str(v) for k, v in value.items()}

    def get_datetime(self, key: str) -> datetime | None:
        """Read a timestamp written either as a YAML date or an ISO string.

        Naive values are taken as UTC.
        """
        value = self.meta.get(key)
        if isinstance(value, datetime):
            result = value
        elif isinstance(value, date):
            result = datetime.combine(value, time())
        elif isinstance(value, str) and value:
            try:
                result = datetime.fromisoformat(value)
            except ValueError:
                return None
        else:
            return None
        if result.tzinfo is None:
            result = result.replace(tzinfo=timezone.utc)
        return result


# --- Front-matter documents ---


def has_front_matter(text: str) -> bool:
    """True if text opens with the front-matter delimiter line."""
    return text.split("\n", 1)[0].strip() == DELIMITER


def parse_front_matter(text: str, source: str = "<string>") -> Document:
    """Split a front-matter document into its YAML block and body.

    Text that does not open with the delimiter, or never closes it, has no
    front-matter: the whole text is the body.
    """
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return Document(body=text)

    for end in range(1, len(lines)):
        if lines[end].strip() == DELIMITER:
            break
    else:
        return Document(body=text)

    block = "\n".join(lines[1:end])
    meta = parse_yaml(block, source) if block.strip() else {}
    body = "\n".join(lines[end + 1 :]).strip()
    return Document(meta=meta, body=body)


def serialize_front_matter(meta: dict[str, Any], body: str = "") -> str:
    """Write meta as a YAML block between delimiters, then the body.

    The delimiter pair is written even when meta is empty.
    """
    parts = [DELIMITER, "\n"]
    if meta:
        parts.append(serialize_yaml(meta))
    parts.extend([DELIMITER, "\n"])
    if body:
        parts.extend([body, "\n"])
    return "".join(parts)


# --- Split pairs ---


def parse_yaml(text: str, source: str = "<string>") -> dict[str, Any]:
    """Parse a YAML mapping. Empty input is an empty mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML in {source}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(f"expected a mapping in {source}, got {type(data).__name__}")
    return data


def serialize_yaml(data: dict[str, Any]) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def parse_titled_markdown(text: str) -> tuple[str, str]:
    """Return (title, body) from a markdown file with a ``# `` heading.

    The first line starting with "# " is the title; everything else,
    stripped, is the body. With no heading the title is "".
    """
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.startswith("# "):
            title = line[2:].strip()
            rest = lines[:i] + lines[i + 1 :]
            return title, "\n".join(rest).strip()
    return "", text.strip()


def serialize_titled_markdown(title: str, body: str = "") -> str:
    if body:
        return f"# {title}\n\n{body}\n"
    return f"# {title}\n"
