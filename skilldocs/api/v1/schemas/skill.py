"""Response schemas for the skills browsing endpoints."""

from pydantic import BaseModel


class SkillInfo(BaseModel):
    """Public-facing description of a single skill document."""

    name: str
    description: str
    agents: list[str]
    tags: list[str]
    packages: list[str] = []
    version: str
    path: str


class SkillsListResponse(BaseModel):
    """Response listing the skills that match the query."""

    skills: list[SkillInfo]
    total: int


class HeadingInfo(BaseModel):
    level: int
    text: str
    line: int


class SkillDetail(SkillInfo):
    """A skill with its outline and body, as an agent would read it."""

    headings: list[HeadingInfo] = []
    code_languages: list[str] = []
    body: str = ""
