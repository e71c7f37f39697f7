import shutil
import tempfile
import textwrap
from pathlib import Path

import pytest

BUNDLED_LIBRARY = Path(__file__).resolve().parents[1] / "library"


def write_skill(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


VALID_SKILL = """
---
name: {name}
description: {description}
license: MIT
metadata:
  author: Test Author
  version: 1.0.0
---

# {title}

## Workflow

1. Read the request
2. Do the work
   carefully and in order
3. Check the result

## Supported Technologies

- Python
- Markdown

## Usage

Use when testing.

## Examples

### First example

Some prose.

## Best Practices

- Keep it short

## Edge Cases

- Empty input
"""


def valid_skill(name: str, description: str = "A skill used in tests.") -> str:
    return VALID_SKILL.format(name=name, description=description, title=name.replace("-", " ").title())


@pytest.fixture
def skills_root() -> Path:
    """
    Creates a small library with a flat document, a bundle, and a nested
    category, and removes it after the test.
    """
    top_level_dir = Path(tempfile.mkdtemp())
    try:
        root = top_level_dir / "library"
        write_skill(root, "ai-ml-operations/data-labeling.md", valid_skill("data-labeling", "Label datasets for training."))
        write_skill(
            root,
            "api-and-integration/api-integration/SKILL.md",
            valid_skill("api-integration", "Integrate a third-party HTTP API."),
        )
        write_skill(root, "api-and-integration/api-integration/reference.md", "# Not a skill\n")
        write_skill(
            root,
            "writing-and-content/copywriting.md",
            valid_skill("copywriting", "Write persuasive marketing copy for landing pages."),
        )
        write_skill(root, "writing-and-content/README.md", "# Writing\n")
        write_skill(root, ".drafts/secret.md", valid_skill("secret"))
        yield root
    finally:
        shutil.rmtree(top_level_dir)
