from .discovery import LoadFailure, discover_skills, find_skill, iter_skill_files, load_skill_content, scan_library
from .errors import (
    AmbiguousSkillError,
    FrontMatterError,
    SkillError,
    SkillNotFoundError,
    SkillValidationError,
)
from .library import CategoryInfo, SearchHit, SkillLibrary
from .lint import LintIssue, LintReport, Severity, lint_document, lint_library, lint_skill
from .models import Section, SectionKind, Skill, SkillMetadata, SkillSummary
from .parsing import parse_skill, parse_skill_file, split_frontmatter
from .prompts import generate_catalog_description, generate_skills_xml, render_skill_prompt
from .scaffold import create_skill, render_skill_template

__version__ = "0.1.0"

__all__ = [
    "discover_skills",
    "scan_library",
    "iter_skill_files",
    "find_skill",
    "load_skill_content",
    "LoadFailure",
    "SkillError",
    "FrontMatterError",
    "SkillValidationError",
    "SkillNotFoundError",
    "AmbiguousSkillError",
    "SkillLibrary",
    "SearchHit",
    "CategoryInfo",
    "lint_library",
    "lint_skill",
    "lint_document",
    "LintIssue",
    "LintReport",
    "Severity",
    "Skill",
    "SkillMetadata",
    "SkillSummary",
    "Section",
    "SectionKind",
    "parse_skill",
    "parse_skill_file",
    "split_frontmatter",
    "generate_skills_xml",
    "generate_catalog_description",
    "render_skill_prompt",
    "render_skill_template",
    "create_skill",
]
