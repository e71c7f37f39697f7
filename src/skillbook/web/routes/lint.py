from typing import List

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ...lint import LintIssue, lint_library

router = APIRouter()


class LintResponse(BaseModel):
    checked: int
    errors: int
    warnings: int
    issues: List[LintIssue]


@router.get("/lint")
async def lint(request: Request) -> LintResponse:
    library = request.app.state.library
    try:
        report = lint_library(library.root, disabled=request.app.state.disabled_rules)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return LintResponse(
        checked=report.checked,
        errors=len(report.errors),
        warnings=len(report.warnings),
        issues=report.issues,
    )
