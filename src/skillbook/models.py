from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SectionKind(str, Enum):
    """Conventional body sections of a skill document."""

    WORKFLOW = "workflow"
    TECHNOLOGIES = "technologies"
    USAGE = "usage"
    EXAMPLES = "examples"
    BEST_PRACTICES = "best_practices"
    EDGE_CASES = "edge_cases"
    OTHER = "other"


# Order in which the conventional sections are expected to appear.
CONVENTIONAL_ORDER: tuple[SectionKind, ...] = (
    SectionKind.WORKFLOW,
    SectionKind.TECHNOLOGIES,
    SectionKind.USAGE,
    SectionKind.EXAMPLES,
    SectionKind.BEST_PRACTICES,
    SectionKind.EDGE_CASES,
)


class SkillMetadata(BaseModel):
    """The ``metadata`` block of a document's front matter."""

    model_config = ConfigDict(extra="allow", frozen=True)

    author: str | None = None
    """Who wrote or maintains the document."""

    version: str | None = None
    """Document version, usually ``MAJOR.MINOR[.PATCH]``."""

    @field_validator("author", "version", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Section(BaseModel):
    """A level-2 section of a document body."""

    model_config = ConfigDict(frozen=True)

    title: str
    kind: SectionKind = SectionKind.OTHER
    level: int = 2
    content: str = ""
    items: list[str] = Field(default_factory=list)
    """Top-level list items in the section, in document order."""

    code_blocks: list[str] = Field(default_factory=list)
    """Contents of fenced code blocks in the section."""

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


class Skill(BaseModel):
    """A parsed skill document.

    Front matter supplies the identity (name, description, license,
    metadata); the body is kept verbatim and also split into sections so
    consumers can pick out the workflow, examples and so on.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """The identifier declared in front matter."""

    description: str
    """What the skill covers and when an agent should reach for it."""

    license: str | None = None
    metadata: SkillMetadata = Field(default_factory=SkillMetadata)

    category: str = ""
    """Topical directory the document lives in, relative to the library root."""

    path: Path | None = None
    title: str | None = None
    body: str = ""
    sections: list[Section] = Field(default_factory=list)
    frontmatter: dict[str, Any] = Field(default_factory=dict)

    @property
    def qualified_name(self) -> str:
        return f"{self.category}/{self.name}" if self.category else self.name

    @property
    def author(self) -> str | None:
        return self.metadata.author

    @property
    def version(self) -> str | None:
        return self.metadata.version

    def section(self, kind: SectionKind) -> Section | None:
        """Return the first section of the given kind, if any."""
        for section in self.sections:
            if section.kind == kind:
                return section
        return None

    def _items(self, kind: SectionKind) -> list[str]:
        section = self.section(kind)
        return list(section.items) if section else []

    @property
    def workflow_steps(self) -> list[str]:
        return self._items(SectionKind.WORKFLOW)

    @property
    def technologies(self) -> list[str]:
        return self._items(SectionKind.TECHNOLOGIES)

    @property
    def usage(self) -> str:
        section = self.section(SectionKind.USAGE)
        return section.content.strip() if section else ""

    @property
    def examples(self) -> list[str]:
        """Examples, one per subsection, list item or code block."""
        section = self.section(SectionKind.EXAMPLES)
        if section is None:
            return []
        from .sections import split_examples

        return split_examples(section)

    @property
    def best_practices(self) -> list[str]:
        return self._items(SectionKind.BEST_PRACTICES)

    @property
    def edge_cases(self) -> list[str]:
        return self._items(SectionKind.EDGE_CASES)

    @property
    def has_examples(self) -> bool:
        return bool(self.examples)


class SkillSummary(BaseModel):
    """Listing view of a skill, without the body."""

    name: str
    qualified_name: str
    category: str
    description: str
    license: str | None = None
    author: str | None = None
    version: str | None = None

    @classmethod
    def from_skill(cls, skill: Skill) -> "SkillSummary":
        return cls(
            name=skill.name,
            qualified_name=skill.qualified_name,
            category=skill.category,
            description=skill.description,
            license=skill.license,
            author=skill.author,
            version=skill.version,
        )
