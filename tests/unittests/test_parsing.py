import textwrap
from pathlib import Path

import pytest

from skillbook import FrontMatterError, SkillError, SkillValidationError, parse_skill, parse_skill_file, split_frontmatter
from skillbook.models import SectionKind

from conftest import valid_skill, write_skill


def test_split_frontmatter_returns_mapping_and_body():
    content = "---\nname: demo\ndescription: Demo skill\n---\n# Demo\n\nBody text.\n"
    frontmatter, body = split_frontmatter(content)
    assert frontmatter == {"name": "demo", "description": "Demo skill"}
    assert body == "# Demo\n\nBody text.\n"


def test_split_frontmatter_tolerates_bom_and_leading_blank_lines():
    content = "\ufeff\n\n---\nname: demo\ndescription: d\n---\nbody"
    frontmatter, body = split_frontmatter(content)
    assert frontmatter["name"] == "demo"
    assert body == "body"


def test_split_frontmatter_does_not_split_on_dashes_inside_values():
    content = "---\nname: demo\ndescription: before---after\n---\nbody\n"
    frontmatter, body = split_frontmatter(content)
    assert frontmatter["description"] == "before---after"
    assert body == "body\n"


def test_split_frontmatter_accepts_yaml_document_end_marker():
    frontmatter, body = split_frontmatter("---\nname: demo\n...\nbody")
    assert frontmatter == {"name": "demo"}
    assert body == "body"


def test_split_frontmatter_empty_block_is_empty_mapping():
    frontmatter, body = split_frontmatter("---\n---\nbody")
    assert frontmatter == {}
    assert body == "body"


@pytest.mark.parametrize(
    "content,message",
    [
        ("# No front matter\n", "does not start"),
        ("", "does not start"),
        ("---\nname: demo\n", "not terminated"),
        ("---\nname: [unclosed\n---\nbody", "Invalid YAML"),
        ("---\n- a\n- b\n---\nbody", "must be a mapping"),
    ],
)
def test_split_frontmatter_errors(content, message):
    with pytest.raises(FrontMatterError, match=message):
        split_frontmatter(content)


def test_parse_skill_reads_identity_and_metadata():
    skill = parse_skill(valid_skill("demo", "A demo skill.").lstrip("\n"), category="tools")
    assert skill.name == "demo"
    assert skill.description == "A demo skill."
    assert skill.license == "MIT"
    assert skill.author == "Test Author"
    assert skill.version == "1.0.0"
    assert skill.category == "tools"
    assert skill.qualified_name == "tools/demo"
    assert skill.title == "Demo"


def test_parse_skill_exposes_conventional_sections():
    skill = parse_skill(valid_skill("demo").lstrip("\n"))
    assert skill.workflow_steps == ["Read the request", "Do the work carefully and in order", "Check the result"]
    assert skill.technologies == ["Python", "Markdown"]
    assert skill.usage == "Use when testing."
    assert skill.examples == ["### First example\n\nSome prose."]
    assert skill.best_practices == ["Keep it short"]
    assert skill.edge_cases == ["Empty input"]
    assert skill.has_examples
    assert [section.kind for section in skill.sections] == [
        SectionKind.WORKFLOW,
        SectionKind.TECHNOLOGIES,
        SectionKind.USAGE,
        SectionKind.EXAMPLES,
        SectionKind.BEST_PRACTICES,
        SectionKind.EDGE_CASES,
    ]


def test_parse_skill_coerces_numeric_version():
    content = textwrap.dedent("""\
        ---
        name: demo
        description: d
        metadata:
          author: someone
          version: 1.5
          reviewed: true
        ---
        body
    """)
    skill = parse_skill(content)
    assert skill.version == "1.5"
    assert skill.metadata.model_extra == {"reviewed": True}


def test_parse_skill_folds_multiline_description():
    content = "---\nname: demo\ndescription: >\n  first line\n  second line\n---\nbody"
    assert parse_skill(content).description == "first line second line"


def test_parse_skill_keeps_unknown_frontmatter_keys():
    content = "---\nname: demo\ndescription: d\ntags: [a, b]\n---\nbody"
    assert parse_skill(content).frontmatter["tags"] == ["a", "b"]


@pytest.mark.parametrize(
    "content,field",
    [
        ("---\ndescription: d\n---\nbody", "name"),
        ("---\nname: '  '\ndescription: d\n---\nbody", "name"),
        ("---\nname: demo\n---\nbody", "description"),
        ("---\nname: demo\ndescription: d\nmetadata: [1, 2]\n---\nbody", "metadata"),
    ],
)
def test_parse_skill_validation_errors(content, field):
    with pytest.raises(SkillValidationError) as excinfo:
        parse_skill(content)
    assert excinfo.value.field == field


def test_parse_skill_file_prefixes_errors_with_path(tmp_path: Path):
    path = write_skill(tmp_path, "broken.md", "no front matter here\n")
    with pytest.raises(FrontMatterError, match="broken.md"):
        parse_skill_file(path)


def test_parse_skill_file_records_path(tmp_path: Path):
    path = write_skill(tmp_path, "demo.md", valid_skill("demo"))
    skill = parse_skill_file(path, category="tools")
    assert skill.path == path
    assert skill.category == "tools"


def test_parse_skill_file_missing_file_raises_skill_error(tmp_path: Path):
    with pytest.raises(SkillError, match="Error reading skill document"):
        parse_skill_file(tmp_path / "missing.md")
