from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import FrontMatterError, SkillError, SkillValidationError
from .models import Skill, SkillMetadata
from .sections import parse_sections

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
FRONTMATTER_END_MARKERS = ("---", "...")


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a document into its YAML front matter mapping and Markdown body.

    The document must open with a ``---`` line (a BOM and leading blank lines
    are tolerated). The block ends at the next line that is exactly ``---``
    or ``...``.

    Raises:
        FrontMatterError: If the block is missing, unterminated, not valid
            YAML, or does not hold a mapping.
    """
    lines = content.lstrip("\ufeff").splitlines(keepends=True)

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start >= len(lines) or lines[start].rstrip() != FRONTMATTER_DELIMITER:
        raise FrontMatterError("Document does not start with a '---' front matter block")

    end = None
    for index in range(start + 1, len(lines)):
        if lines[index].rstrip() in FRONTMATTER_END_MARKERS:
            end = index
            break

    if end is None:
        raise FrontMatterError("Front matter block is not terminated by a closing '---'")

    raw = "".join(lines[start + 1 : end])
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML in front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(data).__name__}")

    body = "".join(lines[end + 1 :])
    return data, body


def _required_text(frontmatter: dict[str, Any], field: str) -> str:
    value = frontmatter.get(field)
    if value is None:
        raise SkillValidationError(f"Front matter is missing required field '{field}'", field=field)
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value:
        raise SkillValidationError(f"Front matter field '{field}' is empty", field=field)
    return value


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


_WHITESPACE = re.compile(r"\s+")


def parse_skill(content: str, path: Path | None = None, category: str = "") -> Skill:
    """Parse a skill document from text.

    Only ``name`` and ``description`` are required. ``license`` and the
    ``metadata`` block are optional; any other keys are kept in
    ``Skill.frontmatter``.
    """
    frontmatter, body = split_frontmatter(content)

    name = _required_text(frontmatter, "name")
    # Folded YAML descriptions keep their newlines
    description = _WHITESPACE.sub(" ", _required_text(frontmatter, "description"))

    raw_metadata = frontmatter.get("metadata") or {}
    if not isinstance(raw_metadata, dict):
        raise SkillValidationError("Front matter field 'metadata' must be a mapping", field="metadata")

    try:
        metadata = SkillMetadata.model_validate(raw_metadata)
    except ValidationError as e:
        raise SkillValidationError(f"Invalid metadata block: {e}", field="metadata") from e

    title, sections = parse_sections(body)

    return Skill(
        name=name,
        description=description,
        license=_optional_text(frontmatter.get("license")),
        metadata=metadata,
        category=category,
        path=path,
        title=title,
        body=body.strip("\n"),
        sections=sections,
        frontmatter=frontmatter,
    )


def read_skill_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SkillError(f"Error reading skill document {path}: {e}") from e


def parse_skill_file(path: Path, category: str = "") -> Skill:
    """Read and parse a skill document from disk.

    Parse errors are re-raised with the file path prepended.
    """
    content = read_skill_text(path)
    try:
        skill = parse_skill(content, path=path, category=category)
    except SkillValidationError as e:
        raise SkillValidationError(f"{path}: {e}", field=e.field) from e
    except FrontMatterError as e:
        raise FrontMatterError(f"{path}: {e}") from e

    logger.debug(f"Parsed skill {skill.qualified_name} from {path}")
    return skill
