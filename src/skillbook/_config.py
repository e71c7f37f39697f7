"""Environment-driven configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

LIBRARY_ENV_VAR = "SKILLBOOK_LIBRARY"
SEARCH_LIMIT_ENV_VAR = "SKILLBOOK_SEARCH_LIMIT"
LINT_DISABLE_ENV_VAR = "SKILLBOOK_LINT_DISABLE"

DEFAULT_LIBRARY = "library"
DEFAULT_SEARCH_LIMIT = 10


def get_library_path() -> Path:
    """Library root from SKILLBOOK_LIBRARY, defaulting to ./library."""
    return Path(os.getenv(LIBRARY_ENV_VAR) or DEFAULT_LIBRARY)


def get_search_limit() -> int | None:
    """Get the maximum number of search results.

    Environment variable:
        SKILLBOOK_SEARCH_LIMIT: Maximum number of hits returned by a search.
                                Default: 10
                                Set to "0" or "none" for unlimited.

    Returns:
        The limit, or None for unlimited.
    """
    limit_str = os.getenv(SEARCH_LIMIT_ENV_VAR)
    if limit_str is None:
        return DEFAULT_SEARCH_LIMIT

    if limit_str.lower() in ("0", "none", "unlimited"):
        return None

    try:
        limit = int(limit_str)
        if limit < 0:
            logger.warning(
                f"Invalid {SEARCH_LIMIT_ENV_VAR} value: {limit_str} "
                f"(must be non-negative), using default {DEFAULT_SEARCH_LIMIT}"
            )
            return DEFAULT_SEARCH_LIMIT
        return limit
    except ValueError:
        logger.warning(f"Invalid {SEARCH_LIMIT_ENV_VAR} value: {limit_str}, using default {DEFAULT_SEARCH_LIMIT}")
        return DEFAULT_SEARCH_LIMIT


def get_disabled_lint_rules() -> list[str]:
    """Rule codes listed in SKILLBOOK_LINT_DISABLE, e.g. "SB007,SB008"."""
    raw = os.getenv(LINT_DISABLE_ENV_VAR, "")
    return [code.strip().upper() for code in raw.split(",") if code.strip()]


class SkillbookConfig:
    _library: Path
    _search_limit: int | None
    _disabled_rules: list[str]

    def __init__(
        self,
        library: str | Path | None = None,
        search_limit: int | None = None,
        disabled_rules: list[str] | None = None,
    ):
        self._library = Path(library) if library else get_library_path()
        self._search_limit = search_limit if search_limit is not None else get_search_limit()
        self._disabled_rules = disabled_rules if disabled_rules is not None else get_disabled_lint_rules()

    @property
    def library(self) -> Path:
        return self._library

    @property
    def search_limit(self) -> int | None:
        # 0 from the command line means unlimited, same as the env var
        return self._search_limit or None

    @property
    def disabled_rules(self) -> list[str]:
        return list(self._disabled_rules)
