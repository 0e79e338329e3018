"""Command-line interface: ``skilldocs list | show | lint | serve``."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from skilldocs.config import settings
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.dependencies import build_linter
from skilldocs.engine.renderer import ReportRenderer
from skilldocs.utils.exceptions import SkillNotFoundError
from skilldocs.utils.logging import setup_logging

app = typer.Typer(help="Browse and lint agent skill documents.", no_args_is_help=True)


def _registry(paths: list[Path] | None) -> SkillRegistry:
    for path in paths or []:
        if not path.exists():
            typer.echo(f"No such file or directory: {path}", err=True)
            raise typer.Exit(code=2)
    registry = SkillRegistry()
    registry.discover(*(paths or settings.skills_dirs))
    return registry


@app.callback()
def main(
    debug: bool = typer.Option(settings.debug, "--debug", help="Verbose console logging"),
):
    # Keep stdout clean for --format json; only warnings go to stderr.
    setup_logging(debug=debug, level=None if debug else "WARNING")


@app.command("list")
def list_cmd(
    agent: Optional[str] = typer.Option(None, "--agent", help="Only skills compatible with this agent"),
    tag: list[str] = typer.Option([], "--tag", help="Required tag (repeatable)"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Free-text relevance filter"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
    path: list[Path] = typer.Option([], "--path", help="Skills directory (repeatable)"),
):
    """List skills, optionally filtered the way an agent would pick them."""
    registry = _registry(path)
    documents = registry.match(agent=agent, tags=tag, query=query)

    if json_output:
        payload = {"skills": [d.metadata.model_dump(exclude={"extra"}) for d in documents]}
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if not documents:
        typer.echo("No matching skills.")
        return
    for document in documents:
        meta = document.metadata
        typer.echo(f"{meta.name}  [{', '.join(meta.tags)}]")
        typer.echo(f"    {meta.description}")


@app.command("show")
def show_cmd(
    name: str = typer.Argument(..., help="Skill name"),
    path: list[Path] = typer.Option([], "--path", help="Skills directory (repeatable)"),
):
    """Print one skill document's metadata and outline."""
    registry = _registry(path)
    try:
        document = registry.get(name)
    except SkillNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)

    meta = document.metadata
    typer.echo(f"name:        {meta.name}")
    typer.echo(f"description: {meta.description}")
    typer.echo(f"agents:      {', '.join(meta.agents)}")
    typer.echo(f"tags:        {', '.join(meta.tags)}")
    if meta.packages:
        typer.echo(f"packages:    {', '.join(meta.packages)}")
    typer.echo(f"path:        {document.path}")
    typer.echo("")
    for heading in document.parsed.headings:
        typer.echo(f"{'  ' * (heading.level - 1)}- {heading.text}")


@app.command("lint")
def lint_cmd(
    paths: Optional[list[Path]] = typer.Argument(None, help="Skill files or directories (default: configured)"),
    links: bool = typer.Option(settings.links_enabled, "--links/--no-links", help="Check that links resolve"),
    all_links: bool = typer.Option(settings.check_all_links, "--all-links", help="Check every link, not only References"),
    strict: bool = typer.Option(settings.strict, "--strict", help="Fail on warnings too"),
    fmt: str = typer.Option("text", "--format", "-f", help="text, json or markdown"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to this directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show passing checks too"),
):
    """Lint the corpus: metadata, code samples, links and conflicting guidance."""
    fmt = fmt.lower()
    if fmt not in ("text", "json", "markdown"):
        typer.echo(f"Unknown format: {fmt}", err=True)
        raise typer.Exit(code=2)

    registry = _registry(paths)
    effective = settings.model_copy(update={"check_all_links": all_links})
    linter = build_linter(effective, check_links=links, strict=strict)
    report = asyncio.run(linter.lint_registry(registry))

    renderer = ReportRenderer(str(output) if output else settings.output_dir)
    if output is not None:
        rendered = asyncio.run(renderer.render(report, "markdown" if fmt == "markdown" else "json"))
        typer.echo(f"Report written to {rendered.file_path}", err=True)

    if fmt == "json":
        typer.echo(renderer.to_json(report))
    elif fmt == "markdown":
        typer.echo(renderer.to_markdown(report))
    else:
        typer.echo(renderer.to_text(report, verbose=verbose))

    if not report.passed:
        raise typer.Exit(code=1)


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(settings.host, "--host"),
    port: int = typer.Option(settings.port, "--port"),
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("skilldocs.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
