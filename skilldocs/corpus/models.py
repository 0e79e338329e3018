"""Data models for skill documents and the results of linting them."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, Field


class SkillMetadata(BaseModel):
    """Frontmatter block of a skill document."""

    name: str
    description: str = ""
    agents: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("agents", "compatible_agents"),
    )
    tags: list[str] = []
    packages: list[str] = []
    version: str = "1.0.0"
    extra: dict = {}

    model_config = {"populate_by_name": True}


class Heading(BaseModel):
    level: int
    text: str
    line: int
    slug: str = ""


class CodeBlock(BaseModel):
    """A fenced code sample found in a document body."""

    language: str = ""
    info: str = ""  # full info string after the fence
    content: str = ""
    line: int  # line of the opening fence
    closed: bool = True
    section: str = ""

    @property
    def first_content_line(self) -> int:
        return self.line + 1


class Link(BaseModel):
    url: str
    text: str = ""
    line: int
    section: str = ""
    kind: str = "inline"  # inline, autolink, reference, html, image


class GuidanceStatement(BaseModel):
    """A directive line mentioning one or more API surfaces in inline code."""

    text: str
    line: int
    positive: list[str] = []
    negative: list[str] = []


class ParsedBody(BaseModel):
    headings: list[Heading] = []
    code_blocks: list[CodeBlock] = []
    links: list[Link] = []
    guidance: list[GuidanceStatement] = []

    def slugs(self) -> set[str]:
        return {h.slug for h in self.headings}


class SkillDocument(BaseModel):
    """A loaded skill document: metadata, raw body and parsed structure."""

    path: str
    metadata: SkillMetadata
    body: str = ""
    body_start_line: int = 1
    parsed: ParsedBody = Field(default_factory=ParsedBody)

    @property
    def name(self) -> str:
        return self.metadata.name


class LoadFailure(BaseModel):
    """A file that could not be turned into a :class:`SkillDocument`."""

    path: str
    error: str
    line: int = 1


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class CheckResult(BaseModel):
    """A single lint check outcome."""

    name: str
    passed: bool
    detail: str = ""
    severity: Severity = Severity.ERROR
    document: str = ""
    line: int | None = None

    def is_blocking(self, strict: bool = False) -> bool:
        if self.passed:
            return False
        if self.severity == Severity.ERROR:
            return True
        return strict and self.severity == Severity.WARNING


class DocumentReport(BaseModel):
    """All check results for one document."""

    document: str
    name: str = ""
    checks: list[CheckResult] = []
    passed: bool = True

    def failures(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.passed]


class CorpusReport(BaseModel):
    """Aggregated lint report for a whole corpus."""

    documents: list[DocumentReport] = []
    corpus_checks: list[CheckResult] = []
    passed: bool = True
    strict: bool = False
    total_documents: int = 0
    error_count: int = 0
    warning_count: int = 0

    def all_checks(self) -> list[CheckResult]:
        checks = [c for d in self.documents for c in d.checks]
        checks.extend(self.corpus_checks)
        return checks
