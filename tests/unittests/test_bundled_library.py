"""The sample library shipped with the repository must stay lint-clean."""

import pytest

from skillbook import SkillLibrary, lint_library

from conftest import BUNDLED_LIBRARY


def test_bundled_library_is_lint_clean():
    report = lint_library(BUNDLED_LIBRARY)
    assert report.checked == 8
    assert report.ok(strict=True), "\n".join(issue.format(BUNDLED_LIBRARY) for issue in report.issues)


def test_bundled_library_covers_every_category():
    library = SkillLibrary.load(BUNDLED_LIBRARY)
    assert [info.name for info in library.categories()] == [
        "ai-ml-operations",
        "api-and-integration",
        "marketing-and-seo",
        "software-development",
        "writing-and-content",
    ]
    assert library.failures == []


def test_bundled_library_search():
    library = SkillLibrary.load(BUNDLED_LIBRARY)
    assert library.search("pull request")[0].skill.name == "code-review"
    assert library.search("glossary placeholders")[0].skill.name == "translation"


@pytest.mark.parametrize("name", ["code-review", "api-integration", "keyword-research", "data-labeling"])
def test_bundled_library_search_by_skill_name(name: str):
    hits = SkillLibrary.load(BUNDLED_LIBRARY).search(name)
    assert hits, f"no hits for {name}"
    assert hits[0].skill.name == name
