from pathlib import Path

import pytest

from skillbook import AmbiguousSkillError, SkillLibrary, SkillNotFoundError
from skillbook.library import tokenize

from conftest import valid_skill, write_skill


@pytest.fixture
def library(skills_root: Path) -> SkillLibrary:
    return SkillLibrary.load(skills_root)


def test_library_indexes_skills(library: SkillLibrary, skills_root: Path):
    assert len(library) == 3
    assert library.root == skills_root
    assert [skill.name for skill in library] == ["data-labeling", "api-integration", "copywriting"]
    assert library.failures == []


def test_library_categories(library: SkillLibrary):
    assert [(info.name, info.count) for info in library.categories()] == [
        ("ai-ml-operations", 1),
        ("api-and-integration", 1),
        ("writing-and-content", 1),
    ]


def test_library_get_by_qualified_and_bare_name(library: SkillLibrary):
    assert library.get("writing-and-content/copywriting").name == "copywriting"
    assert library.get("copywriting").category == "writing-and-content"
    assert library.get("/ai-ml-operations/data-labeling/").name == "data-labeling"


def test_library_get_unknown(library: SkillLibrary):
    with pytest.raises(SkillNotFoundError):
        library.get("translation")
    assert "translation" not in library
    assert "copywriting" in library


def test_library_get_ambiguous(skills_root: Path):
    write_skill(skills_root, "marketing/copywriting.md", valid_skill("copywriting"))
    library = SkillLibrary.load(skills_root)
    with pytest.raises(AmbiguousSkillError):
        library.get("copywriting")
    assert "copywriting" in library
    assert library.get("marketing/copywriting").category == "marketing"


def test_library_get_duplicate_names_in_one_category(skills_root: Path):
    write_skill(skills_root, "misc/dup.md", valid_skill("dup", "First."))
    write_skill(skills_root, "misc/dup-copy.md", valid_skill("dup", "Second."))
    library = SkillLibrary.load(skills_root)

    with pytest.raises(AmbiguousSkillError) as exc_info:
        library.get("misc/dup")
    assert exc_info.value.candidates == ["misc/dup-copy.md", "misc/dup.md"]

    with pytest.raises(AmbiguousSkillError) as exc_info:
        library.get("dup")
    assert exc_info.value.candidates == ["misc/dup-copy.md", "misc/dup.md"]


def test_library_get_ambiguous_lists_each_candidate_once(skills_root: Path):
    write_skill(skills_root, "marketing/copywriting.md", valid_skill("copywriting"))
    write_skill(skills_root, "marketing/copywriting-v2.md", valid_skill("copywriting"))
    library = SkillLibrary.load(skills_root)

    with pytest.raises(AmbiguousSkillError) as exc_info:
        library.get("copywriting")
    assert exc_info.value.candidates == [
        "marketing/copywriting-v2.md",
        "marketing/copywriting.md",
        "writing-and-content/copywriting",
    ]


def test_library_by_category(library: SkillLibrary):
    assert [skill.name for skill in library.by_category("writing-and-content/")] == ["copywriting"]
    assert library.by_category("unknown") == []


def test_library_load_missing_root(tmp_path: Path):
    library = SkillLibrary.load(tmp_path / "missing")
    assert len(library) == 0
    assert library.categories() == []


def test_tokenize_keeps_technical_terms():
    assert tokenize("Node.js, C++ and C#; HTTP.") == ["node.js", "c++", "and", "c#", "http"]


def test_tokenize_splits_hyphenated_compounds():
    assert tokenize("data-labeling, api-and-integration") == ["data", "labeling", "api", "and", "integration"]


def test_search_by_hyphenated_name(library: SkillLibrary):
    hits = library.search("data-labeling")
    assert hits[0].skill.qualified_name == "ai-ml-operations/data-labeling"
    assert set(hits[0].matched_terms) == {"data", "labeling"}


def test_search_ranks_name_matches_first(library: SkillLibrary):
    hits = library.search("copywriting")
    assert [hit.skill.name for hit in hits] == ["copywriting"]

    hits = library.search("api")
    assert hits[0].skill.name == "api-integration"


def test_search_requires_every_term(library: SkillLibrary):
    assert [hit.skill.name for hit in library.search("marketing landing")] == ["copywriting"]
    assert library.search("marketing kubernetes") == []


def test_search_matches_body_and_technologies(library: SkillLibrary):
    # Every test document lists Python under Supported Technologies
    hits = library.search("python")
    assert len(hits) == 3
    assert all(hit.score > 0 for hit in hits)


def test_search_orders_ties_by_qualified_name(library: SkillLibrary):
    hits = library.search("workflow")
    assert [hit.skill.qualified_name for hit in hits] == [
        "ai-ml-operations/data-labeling",
        "api-and-integration/api-integration",
        "writing-and-content/copywriting",
    ]


def test_search_category_filter_and_limit(library: SkillLibrary):
    assert [hit.skill.name for hit in library.search("python", category="ai-ml-operations")] == ["data-labeling"]
    assert len(library.search("python", limit=2)) == 2
    assert len(library.search("python", limit=0)) == 3


def test_search_empty_query(library: SkillLibrary):
    assert library.search("") == []
    assert library.search("  ,, ") == []
