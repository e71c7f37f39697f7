from __future__ import annotations

from pathlib import Path


class SkillError(Exception):
    """Base error for loading and resolving skill documents."""


class FrontMatterError(SkillError):
    """Raised when a document's front matter is missing or malformed."""


class SkillValidationError(SkillError):
    """Raised when front matter parses but lacks a required field."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class SkillNotFoundError(SkillError):
    """Raised when no document matches the requested name."""

    def __init__(self, name: str, root: Path | None = None):
        location = f" in {root}" if root else ""
        super().__init__(f"Skill '{name}' not found{location}")
        self.name = name


class AmbiguousSkillError(SkillError):
    """Raised when a name matches more than one document."""

    def __init__(self, name: str, candidates: list[str]):
        super().__init__(f"Skill name '{name}' is ambiguous, use one of: {', '.join(candidates)}")
        self.name = name
        self.candidates = candidates
