import uuid
from pathlib import Path


def ensure_dir(path: str | Path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def generate_filename(prefix: str, extension: str) -> str:
    short_id = uuid.uuid4().hex[:8]
    return f"{safe_filename(prefix) or 'report'}_{short_id}.{extension}"


def safe_filename(name: str) -> str:
    keepchars = (".", "_", "-")
    return "".join(c for c in name if c.isalnum() or c in keepchars).strip()


def display_path(path: str | Path, root: str | Path | None = None) -> str:
    """Return *path* relative to *root* (default: cwd) when possible."""
    p = Path(path)
    base = Path(root) if root is not None else Path.cwd()
    try:
        return p.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return p.as_posix()
