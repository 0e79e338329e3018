"""Skills browsing endpoints -- list, filter and read skill documents."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from skilldocs.api.v1.schemas.common import ErrorResponse
from skilldocs.api.v1.schemas.skill import HeadingInfo, SkillDetail, SkillInfo, SkillsListResponse
from skilldocs.corpus.models import SkillDocument
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.dependencies import get_skills_registry

router = APIRouter()


def _info(document: SkillDocument) -> SkillInfo:
    meta = document.metadata
    return SkillInfo(
        name=meta.name,
        description=meta.description,
        agents=meta.agents,
        tags=meta.tags,
        packages=meta.packages,
        version=meta.version,
        path=document.path,
    )


@router.get(
    "/skills",
    response_model=SkillsListResponse,
    summary="List skills",
    description="Return metadata for the skills matching the optional agent, tag and text filters.",
)
async def list_skills(
    agent: str | None = None,
    tag: list[str] = Query(default=[]),
    q: str | None = None,
    registry: SkillRegistry = Depends(get_skills_registry),
) -> SkillsListResponse:
    documents = registry.match(agent=agent, tags=tag, query=q)
    skills = [_info(d) for d in documents]
    return SkillsListResponse(skills=skills, total=len(skills))


@router.get(
    "/skills/{name}",
    response_model=SkillDetail,
    responses={
        404: {"model": ErrorResponse, "description": "Skill not found"},
    },
    summary="Read one skill",
)
async def get_skill(
    name: str,
    registry: SkillRegistry = Depends(get_skills_registry),
) -> SkillDetail:
    document = registry.get(name)
    languages = sorted({b.language for b in document.parsed.code_blocks if b.language})
    return SkillDetail(
        **_info(document).model_dump(),
        headings=[
            HeadingInfo(level=h.level, text=h.text, line=h.line)
            for h in document.parsed.headings
        ],
        code_languages=languages,
        body=document.body,
    )
