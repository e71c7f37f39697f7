from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...library import CategoryInfo, SkillLibrary
from ...models import Section, SkillSummary
from ...prompts import render_skill_prompt
from ..deps import get_library, get_search_limit, resolve_skill

router = APIRouter()


class SkillDetail(SkillSummary):
    title: Optional[str] = None
    workflow_steps: List[str]
    technologies: List[str]
    examples: List[str]
    best_practices: List[str]
    edge_cases: List[str]
    sections: List[Section]
    body: str


class SearchResult(BaseModel):
    skill: SkillSummary
    score: int


@router.get("/categories")
async def list_categories(library: SkillLibrary = Depends(get_library)) -> List[CategoryInfo]:
    return library.categories()


@router.get("/skills")
async def list_skills(
    category: Optional[str] = None,
    library: SkillLibrary = Depends(get_library),
) -> List[SkillSummary]:
    skills = library.by_category(category) if category is not None else library.skills
    return [SkillSummary.from_skill(skill) for skill in skills]


@router.get("/prompts/{name:path}", response_class=PlainTextResponse)
async def get_skill_prompt(name: str, library: SkillLibrary = Depends(get_library)) -> str:
    return render_skill_prompt(resolve_skill(library, name))


@router.get("/skills/{name:path}")
async def get_skill(name: str, library: SkillLibrary = Depends(get_library)) -> SkillDetail:
    skill = resolve_skill(library, name)
    return SkillDetail(
        **SkillSummary.from_skill(skill).model_dump(),
        title=skill.title,
        workflow_steps=skill.workflow_steps,
        technologies=skill.technologies,
        examples=skill.examples,
        best_practices=skill.best_practices,
        edge_cases=skill.edge_cases,
        sections=skill.sections,
        body=skill.body,
    )


@router.get("/search")
async def search_skills(
    q: str = Query(..., min_length=1),
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0, description="Maximum hits, 0 for unlimited"),
    library: SkillLibrary = Depends(get_library),
    default_limit: Optional[int] = Depends(get_search_limit),
) -> List[SearchResult]:
    hits = library.search(q, category=category, limit=default_limit if limit is None else limit)
    return [SearchResult(skill=SkillSummary.from_skill(hit.skill), score=hit.score) for hit in hits]
