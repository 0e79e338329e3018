class SkillDocsError(Exception):
    """Base exception for the skill documentation toolkit."""


class SkillNotFoundError(SkillDocsError):
    def __init__(self, skill_name: str):
        self.skill_name = skill_name
        super().__init__(f"Skill not found: {skill_name}")


class FrontmatterError(SkillDocsError):
    def __init__(self, detail: str, line: int = 1):
        self.detail = detail
        self.line = line
        super().__init__(f"Invalid frontmatter (line {line}): {detail}")


class MetadataError(SkillDocsError):
    def __init__(self, field: str, detail: str):
        self.field = field
        super().__init__(f"Invalid metadata field '{field}': {detail}")


class DocumentLoadError(SkillDocsError):
    def __init__(self, path: str, detail: str, line: int = 1):
        self.path = path
        self.detail = detail
        self.line = line
        super().__init__(f"Failed to load {path}: {detail}")


class LinkCheckError(SkillDocsError):
    def __init__(self, url: str, detail: str):
        self.url = url
        super().__init__(f"Link check failed for {url}: {detail}")


class ReportRenderError(SkillDocsError):
    def __init__(self, format_type: str, detail: str):
        self.format_type = format_type
        super().__init__(f"Failed to render {format_type} report: {detail}")
