import logging
from pathlib import Path
from typing import Iterable, Optional

from fastapi import FastAPI

from .. import __version__
from .._config import SkillbookConfig
from ..library import SkillLibrary
from .routes import lint, skills

logger = logging.getLogger(__name__)


def create_app(
    library_root: Path,
    disabled_rules: Optional[Iterable[str]] = None,
    search_limit: Optional[int] = None,
) -> FastAPI:
    """Build the read-only catalog API over one library directory.

    The library is loaded once here; restart the server to pick up edits.
    Settings not passed in are read from the environment.
    """
    config = SkillbookConfig(
        library=library_root,
        search_limit=search_limit,
        disabled_rules=list(disabled_rules) if disabled_rules is not None else None,
    )
    library = SkillLibrary.load(config.library)
    logger.info(f"Serving {len(library)} skill(s) from {config.library}")

    app = FastAPI(
        title="skillbook",
        version=__version__,
        description="Read-only catalog of Markdown skill documents.",
    )
    app.state.library = library
    app.state.disabled_rules = config.disabled_rules
    app.state.search_limit = config.search_limit

    app.include_router(skills.router, tags=["skills"], responses={404: {"description": "Not found"}})
    app.include_router(lint.router, tags=["lint"])

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "skills": len(library), "failures": len(library.failures)}

    return app
