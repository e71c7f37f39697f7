from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml

from .discovery import SKILL_FILENAME

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
CATEGORY_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*(?:/[a-z0-9]+(?:-[a-z0-9]+)*)*$")


def validate_slug(name: str) -> str:
    if not SLUG_PATTERN.match(name):
        raise ValueError(f"Skill name '{name}' must be lowercase words joined by hyphens, e.g. 'code-review'")
    return name


def render_skill_template(
    name: str,
    description: str,
    author: str | None = None,
    version: str = "1.0.0",
    license: str = "MIT",
) -> str:
    """Create the text of a new skill document with every conventional section."""
    frontmatter = {
        "name": validate_slug(name),
        "description": description.strip(),
        "license": license,
        "metadata": {"author": author or "unknown", "version": version},
    }
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True, width=1000)
    title = name.replace("-", " ").title()

    return f"""---
{header}---

# {title}

{description.strip()}

## Workflow

1. Clarify the goal, inputs and constraints of the request
2. Gather the context the task depends on
3. Carry out the task step by step, checking intermediate results
4. Review the result against the best practices below before handing it back

## Supported Technologies

- List the tools, languages or platforms this guidance applies to

## Usage

Describe when an agent should reach for this skill and what it needs from the user first.

## Examples

### Example 1

**Request:** A short, realistic request this skill handles.

**Approach:** How the workflow above applies to it.

## Best Practices

- Prefer small, verifiable steps
- State assumptions explicitly

## Edge Cases

- What to do when required input is missing or ambiguous
"""


def skill_path(skills_directory: Path, category: str, name: str, bundle: bool = False) -> Path:
    category = category.strip("/")
    if category and not CATEGORY_PATTERN.match(category):
        raise ValueError(f"Category '{category}' must be lowercase words joined by hyphens, e.g. 'writing-and-content'")
    directory = skills_directory / category if category else skills_directory
    if bundle:
        return directory / name / SKILL_FILENAME
    return directory / f"{name}.md"


def create_skill(
    skills_directory: Path,
    category: str,
    name: str,
    description: str,
    author: str | None = None,
    version: str = "1.0.0",
    license: str = "MIT",
    bundle: bool = False,
    force: bool = False,
) -> Path:
    """Write a new skill document from the template and return its path."""
    content = render_skill_template(name, description, author=author, version=version, license=license)
    path = skill_path(skills_directory, category, name, bundle=bundle)
    if path.exists() and not force:
        raise FileExistsError(f"Skill document already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Created skill document {path}")
    return path
