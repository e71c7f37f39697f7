"""Read-only, in-memory index over a skill library directory."""

from __future__ import annotations

import logging
import re
from collections import Counter
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel

from .discovery import LoadFailure, find_skill, scan_library
from .errors import AmbiguousSkillError, SkillNotFoundError
from .models import Skill, SectionKind

logger = logging.getLogger(__name__)

_TERM_PATTERN = re.compile(r"[a-z0-9][a-z0-9+#.]*")

# Relative weight of a term hit in each part of a document
NAME_WEIGHT = 5
DESCRIPTION_WEIGHT = 3
HEADING_WEIGHT = 2
BODY_WEIGHT = 1
# Cap on body occurrences counted per term so long documents do not dominate
BODY_HITS_CAP = 5


def tokenize(text: str) -> list[str]:
    """Lowercase terms of a text. Hyphenated compounds split into their parts."""
    return [term.strip(".") for term in _TERM_PATTERN.findall(text.lower()) if term.strip(".")]


class CategoryInfo(BaseModel):
    name: str
    count: int


class SearchHit(BaseModel):
    skill: Skill
    score: int
    matched_terms: list[str]


class SkillLibrary:
    """Loads a library once and answers lookups and keyword searches."""

    def __init__(self, skills: list[Skill], failures: list[LoadFailure] | None = None, root: Path | None = None):
        self.root = root
        self._skills = sorted(skills, key=lambda skill: skill.qualified_name)
        self.failures = list(failures or [])

    @classmethod
    def load(cls, root: str | Path) -> "SkillLibrary":
        root = Path(root)
        skills, failures = scan_library(root)
        return cls(skills, failures, root=root)

    @property
    def skills(self) -> list[Skill]:
        return list(self._skills)

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[Skill]:
        return iter(self._skills)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self.get(name)
        except AmbiguousSkillError:
            return True
        except SkillNotFoundError:
            return False
        return True

    def get(self, name: str) -> Skill:
        """Look a skill up by qualified name, or by bare name when unambiguous."""
        return find_skill(self._skills, name, self.root)

    def categories(self) -> list[CategoryInfo]:
        counts = Counter(skill.category for skill in self._skills)
        return [CategoryInfo(name=name, count=count) for name, count in sorted(counts.items())]

    def by_category(self, category: str) -> list[Skill]:
        category = category.strip("/")
        return [skill for skill in self._skills if skill.category == category]

    def search(self, query: str, category: str | None = None, limit: int | None = None) -> list[SearchHit]:
        """Rank skills against a keyword query.

        Every query term has to appear somewhere in a document for it to
        match. Results are ordered by score, then qualified name.
        """
        terms = list(dict.fromkeys(tokenize(query)))
        if not terms:
            return []

        candidates = self.by_category(category) if category is not None else self._skills
        hits: list[SearchHit] = []
        for skill in candidates:
            score = _score(skill, terms)
            if score is not None:
                hits.append(SearchHit(skill=skill, score=score, matched_terms=terms))

        hits.sort(key=lambda hit: (-hit.score, hit.skill.qualified_name))
        logger.debug(f"Search {terms!r} matched {len(hits)} skill(s)")
        if limit is not None and limit > 0:
            return hits[:limit]
        return hits


def _score(skill: Skill, terms: list[str]) -> int | None:
    name_terms = set(tokenize(skill.name) + tokenize(skill.category))
    description_terms = Counter(tokenize(skill.description))
    heading_terms = Counter(
        term
        for section in skill.sections
        for term in tokenize(
            section.title + " " + (" ".join(section.items) if section.kind == SectionKind.TECHNOLOGIES else "")
        )
    )
    body_terms = Counter(tokenize(skill.body))

    total = 0
    for term in terms:
        term_score = (
            (NAME_WEIGHT if term in name_terms else 0)
            + DESCRIPTION_WEIGHT * description_terms[term]
            + HEADING_WEIGHT * heading_terms[term]
            + BODY_WEIGHT * min(body_terms[term], BODY_HITS_CAP)
        )
        if term_score == 0:
            return None
        total += term_score
    return total
