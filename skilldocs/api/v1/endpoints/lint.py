"""Lint endpoints -- run the checks over the corpus or a posted document."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skilldocs.api.v1.schemas.lint import LintDocumentRequest, LintRequest
from skilldocs.config import Settings
from skilldocs.corpus.models import CorpusReport, DocumentReport
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.dependencies import build_linter, get_settings, get_skills_registry

router = APIRouter()


@router.post(
    "/lint",
    response_model=CorpusReport,
    summary="Lint the corpus",
    description="Run metadata, code-sample, link and conflict checks over every loaded skill.",
)
async def lint_corpus(
    request: LintRequest | None = None,
    registry: SkillRegistry = Depends(get_skills_registry),
    settings: Settings = Depends(get_settings),
) -> CorpusReport:
    request = request or LintRequest()
    linter = build_linter(settings, check_links=request.check_links, strict=request.strict)
    return await linter.lint_registry(registry)


@router.post(
    "/lint/document",
    response_model=DocumentReport,
    summary="Lint a single document",
    description="Lint a skill document supplied in the request body. Links are not checked.",
)
async def lint_document(
    request: LintDocumentRequest,
    settings: Settings = Depends(get_settings),
) -> DocumentReport:
    linter = build_linter(settings, check_links=False, strict=request.strict)
    return await linter.lint_text(request.content, request.filename)
