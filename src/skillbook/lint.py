"""Structural checks for skill documents.

The rules encode the library's authoring conventions: parseable front
matter with a name and description, a workflow, at least one example, and
names that are unique within a category directory. Warnings cover the
softer conventions (license, author/version metadata, section order).
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from enum import Enum
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field

from .discovery import SKILL_FILENAME, iter_skill_files
from .errors import SkillError
from .models import CONVENTIONAL_ORDER, SectionKind, Skill
from .parsing import parse_skill, read_skill_text, split_frontmatter

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^\d+\.\d+(?:\.\d+)?(?:[-+][0-9A-Za-z.\-]+)?$")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


RULES: dict[str, tuple[Severity, str]] = {
    "SB001": (Severity.ERROR, "front matter missing or unparseable"),
    "SB002": (Severity.ERROR, "name missing or empty"),
    "SB003": (Severity.ERROR, "description missing or empty"),
    "SB004": (Severity.ERROR, "no workflow section"),
    "SB005": (Severity.ERROR, "no example"),
    "SB006": (Severity.ERROR, "duplicate name in the same directory"),
    "SB007": (Severity.WARNING, "no license"),
    "SB008": (Severity.WARNING, "metadata author or version missing"),
    "SB009": (Severity.WARNING, "version is not MAJOR.MINOR[.PATCH]"),
    "SB010": (Severity.WARNING, "name does not match the file name"),
    "SB011": (Severity.WARNING, "sections out of conventional order"),
    "SB012": (Severity.WARNING, "empty section"),
}


class LintIssue(BaseModel):
    code: str
    severity: Severity
    message: str
    path: Path | None = None
    skill: str | None = None

    def format(self, root: Path | None = None) -> str:
        location = "<unknown>"
        if self.path is not None:
            location = str(self.path.relative_to(root)) if root and root in self.path.parents else str(self.path)
        return f"{location}: {self.code} [{self.severity.value}] {self.message}"


class LintReport(BaseModel):
    issues: list[LintIssue] = Field(default_factory=list)
    checked: int = 0

    @property
    def errors(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity == Severity.WARNING]

    def ok(self, strict: bool = False) -> bool:
        """True when there are no errors (and, if strict, no warnings)."""
        return not self.issues if strict else not self.errors


def _issue(code: str, message: str, path: Path | None = None, skill: str | None = None) -> LintIssue:
    severity, _ = RULES[code]
    return LintIssue(code=code, severity=severity, message=message, path=path, skill=skill)


def _expected_stem(path: Path) -> str:
    return path.parent.name if path.name == SKILL_FILENAME else path.stem


def _check_order(skill: Skill) -> str | None:
    seen: list[SectionKind] = []
    for section in skill.sections:
        if section.kind in CONVENTIONAL_ORDER and section.kind not in seen:
            seen.append(section.kind)

    for earlier, later in zip(seen, seen[1:]):
        if CONVENTIONAL_ORDER.index(earlier) > CONVENTIONAL_ORDER.index(later):
            return f"'{later.value}' section should come before '{earlier.value}'"
    return None


def lint_skill(skill: Skill) -> list[LintIssue]:
    """Check one parsed skill against the body and metadata conventions."""
    issues: list[LintIssue] = []
    path, name = skill.path, skill.qualified_name

    if skill.section(SectionKind.WORKFLOW) is None:
        issues.append(_issue("SB004", "No Workflow section found", path, name))
    if not skill.has_examples:
        issues.append(_issue("SB005", "No example found in an Examples section", path, name))

    if not skill.license:
        issues.append(_issue("SB007", "Front matter has no 'license'", path, name))

    missing = [field for field in ("author", "version") if not getattr(skill.metadata, field)]
    if missing:
        issues.append(_issue("SB008", f"metadata is missing {', '.join(missing)}", path, name))
    if skill.version and not VERSION_PATTERN.match(skill.version):
        issues.append(_issue("SB009", f"Version '{skill.version}' is not MAJOR.MINOR[.PATCH]", path, name))

    if path is not None and skill.name != _expected_stem(path):
        issues.append(_issue("SB010", f"Name '{skill.name}' does not match '{_expected_stem(path)}'", path, name))

    order_problem = _check_order(skill)
    if order_problem:
        issues.append(_issue("SB011", order_problem, path, name))

    for section in skill.sections:
        # Empty Examples sections are already reported as SB005
        if section.kind not in (SectionKind.OTHER, SectionKind.EXAMPLES) and section.is_empty:
            issues.append(_issue("SB012", f"Section '{section.title}' is empty", path, name))

    return issues


def lint_document(content: str, path: Path | None = None, category: str = "") -> tuple[Skill | None, list[LintIssue]]:
    """Lint a single document's text, returning the parsed skill when it loads."""
    try:
        frontmatter, _ = split_frontmatter(content)
    except SkillError as e:
        return None, [_issue("SB001", str(e), path)]

    issues: list[LintIssue] = []
    for field, code in (("name", "SB002"), ("description", "SB003")):
        value = frontmatter.get(field)
        if value is None or not str(value).strip():
            issues.append(_issue(code, f"Front matter '{field}' is missing or empty", path))
    if issues:
        return None, issues

    try:
        skill = parse_skill(content, path=path, category=category)
    except SkillError as e:
        return None, [_issue("SB001", str(e), path)]

    return skill, lint_skill(skill)


def _check_duplicates(skills: Iterable[Skill]) -> list[LintIssue]:
    by_directory: dict[tuple[str, str], list[Skill]] = defaultdict(list)
    for skill in skills:
        by_directory[(skill.category, skill.name)].append(skill)

    issues = []
    for (category, name), group in sorted(by_directory.items()):
        if len(group) < 2:
            continue
        paths = ", ".join(str(skill.path.name if skill.path else "?") for skill in group)
        for skill in group:
            issues.append(
                _issue(
                    "SB006",
                    f"Name '{name}' is declared {len(group)} times in '{category or '.'}' ({paths})",
                    skill.path,
                    skill.qualified_name,
                )
            )
    return issues


def lint_library(skills_directory: Path, disabled: Iterable[str] = ()) -> LintReport:
    """Lint every document under a library root."""
    if not skills_directory.is_dir():
        raise FileNotFoundError(f"Skills directory not found: {skills_directory}")

    disabled = {code.strip().upper() for code in disabled if code.strip()}
    unknown = disabled - RULES.keys()
    if unknown:
        logger.warning(f"Ignoring unknown lint rule code(s): {', '.join(sorted(unknown))}")

    report = LintReport()
    skills: list[Skill] = []
    for path, category in iter_skill_files(skills_directory):
        report.checked += 1
        try:
            content = read_skill_text(path)
        except SkillError as e:
            report.issues.append(_issue("SB001", str(e), path))
            continue

        skill, issues = lint_document(content, path=path, category=category)
        report.issues.extend(issues)
        if skill is not None:
            skills.append(skill)

    report.issues.extend(_check_duplicates(skills))
    report.issues = [issue for issue in report.issues if issue.code not in disabled]
    report.issues.sort(key=lambda issue: (str(issue.path or ""), issue.code))

    logger.info(
        f"Linted {report.checked} document(s): {len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    return report
