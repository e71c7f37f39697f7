from typing import Optional

from fastapi import HTTPException, Request

from ..errors import AmbiguousSkillError, SkillNotFoundError
from ..library import SkillLibrary
from ..models import Skill


def get_library(request: Request) -> SkillLibrary:
    return request.app.state.library


def get_search_limit(request: Request) -> Optional[int]:
    return request.app.state.search_limit


def resolve_skill(library: SkillLibrary, name: str) -> Skill:
    """Look a skill up, mapping lookup errors onto HTTP status codes."""
    try:
        return library.get(name)
    except AmbiguousSkillError as e:
        raise HTTPException(status_code=409, detail={"message": str(e), "candidates": e.candidates}) from e
    except SkillNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
