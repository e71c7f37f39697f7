from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterator, Literal

from pydantic import BaseModel

from .errors import AmbiguousSkillError, FrontMatterError, SkillError, SkillNotFoundError, SkillValidationError
from .models import Skill
from .parsing import parse_skill_file, read_skill_text

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
IGNORED_FILENAMES = frozenset({"readme.md", "changelog.md", "contributing.md", "license.md"})


class LoadFailure(BaseModel):
    """A document that was found but could not be loaded."""

    path: Path
    category: str
    reason: Literal["frontmatter", "validation", "read"]
    message: str
    field: str | None = None


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def _inside_bundle(directory: Path, root: Path) -> bool:
    """Whether directory is, or sits below, a SKILL.md bundle under root."""
    current = directory
    while current != root and root in current.parents:
        if (current / SKILL_FILENAME).is_file():
            return True
        current = current.parent
    return False


def _category_of(directory: Path, root: Path) -> str:
    relative = directory.relative_to(root).as_posix()
    return "" if relative == "." else relative


def iter_skill_files(skills_directory: Path) -> Iterator[tuple[Path, str]]:
    """Yield (path, category) for every skill document under the root.

    Accepts both ``<category>/<name>.md`` and ``<category>/<name>/SKILL.md``.
    Extra Markdown files inside a bundle directory are bundle assets, not
    documents of their own.
    """
    root = skills_directory
    for path in sorted(root.rglob("*.md")):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if _is_hidden(relative) or path.name.lower() in IGNORED_FILENAMES:
            continue

        if path.name == SKILL_FILENAME:
            if path.parent != root and _inside_bundle(path.parent.parent, root):
                continue
            category_dir = path.parent.parent if path.parent != root else root
            yield path, _category_of(category_dir, root)
        else:
            if _inside_bundle(path.parent, root):
                continue
            yield path, _category_of(path.parent, root)


def _failure(path: Path, category: str, error: SkillError) -> LoadFailure:
    if isinstance(error, FrontMatterError):
        return LoadFailure(path=path, category=category, reason="frontmatter", message=str(error))
    if isinstance(error, SkillValidationError):
        return LoadFailure(path=path, category=category, reason="validation", message=str(error), field=error.field)
    return LoadFailure(path=path, category=category, reason="read", message=str(error))


def scan_library(skills_directory: Path) -> tuple[list[Skill], list[LoadFailure]]:
    """Load every document under the root, keeping a record of the failures."""
    if not skills_directory.is_dir():
        logger.warning(f"Skills directory not found: {skills_directory}")
        return [], []

    skills: list[Skill] = []
    failures: list[LoadFailure] = []
    for path, category in iter_skill_files(skills_directory):
        try:
            skills.append(parse_skill_file(path, category=category))
        except SkillError as e:
            logger.error(f"Failed to parse skill {path.relative_to(skills_directory)}: {e}")
            failures.append(_failure(path, category, e))

    logger.info(f"Loaded {len(skills)} skill(s) from {skills_directory} ({len(failures)} failed)")
    return skills, failures


def discover_skills(skills_directory: Path) -> list[Skill]:
    """Discover available skills and return them, skipping unparseable documents."""
    skills, _ = scan_library(skills_directory)
    return skills


def _candidate_labels(matches: list[Skill], skills_directory: Path | None) -> list[str]:
    """Name each match by qualified name, or by document path where qualified names collide."""
    counts = Counter(skill.qualified_name for skill in matches)
    labels = set()
    for skill in matches:
        if counts[skill.qualified_name] == 1 or skill.path is None:
            labels.add(skill.qualified_name)
        elif skills_directory is not None and skill.path.is_relative_to(skills_directory):
            labels.add(skill.path.relative_to(skills_directory).as_posix())
        else:
            labels.add(str(skill.path))
    return sorted(labels)


def find_skill(skills: list[Skill], name: str, skills_directory: Path | None = None) -> Skill:
    """Resolve a qualified (``category/name``) or bare name to one skill.

    Raises:
        SkillNotFoundError: If nothing matches.
        AmbiguousSkillError: If a bare name is declared in several categories,
            or several documents declare the same qualified name.
    """
    name = name.strip().strip("/")
    matches = [skill for skill in skills if skill.qualified_name == name]
    if not matches:
        matches = [skill for skill in skills if skill.name == name]
    if not matches:
        raise SkillNotFoundError(name, skills_directory)
    if len(matches) > 1:
        raise AmbiguousSkillError(name, _candidate_labels(matches, skills_directory))
    return matches[0]


def load_skill_content(skills_directory: Path, skill_name: str) -> str:
    """Load and return the full text of a skill document."""
    skill = find_skill(discover_skills(skills_directory), skill_name, skills_directory)
    return read_skill_text(skill.path)
