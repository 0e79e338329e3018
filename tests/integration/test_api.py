"""Integration tests for API endpoints."""
import pytest
from httpx import ASGITransport, AsyncClient

from skilldocs.corpus.registry import SkillRegistry
from skilldocs.main import create_app


@pytest.fixture
def app(skills_dir):
    application = create_app()
    # The lifespan does not run under ASGITransport, so build the registry here.
    registry = SkillRegistry()
    registry.discover(skills_dir)
    application.state.skills_registry = registry
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert response.headers["x-request-id"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/api/v1/health", headers={"x-request-id": "abc123"})
    assert response.headers["x-request-id"] == "abc123"


@pytest.mark.asyncio
async def test_list_skills(client):
    response = await client.get("/api/v1/skills")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [s["name"] for s in data["skills"]] == ["gadget-tree", "widget-client"]


@pytest.mark.asyncio
async def test_list_skills_filtered(client):
    response = await client.get("/api/v1/skills", params={"agent": "cursor", "tag": ["php", "http"]})
    data = response.json()
    assert [s["name"] for s in data["skills"]] == ["widget-client"]
    assert data["skills"][0]["packages"] == ["acme/widget-client"]


@pytest.mark.asyncio
async def test_list_skills_query(client):
    response = await client.get("/api/v1/skills", params={"q": "subtree"})
    assert response.json()["total"] == 0

    response = await client.get("/api/v1/skills", params={"q": "gadget trees"})
    assert [s["name"] for s in response.json()["skills"]] == ["gadget-tree"]


@pytest.mark.asyncio
async def test_get_skill(client):
    response = await client.get("/api/v1/skills/widget-client")
    assert response.status_code == 200
    data = response.json()
    assert data["code_languages"] == ["json", "php"]
    assert [h["text"] for h in data["headings"]] == ["Widget client", "Usage", "References"]
    assert data["headings"][0]["line"] == 9
    assert "Widget::connect" in data["body"]


@pytest.mark.asyncio
async def test_get_missing_skill(client):
    response = await client.get("/api/v1/skills/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "SkillNotFoundError"


@pytest.mark.asyncio
async def test_lint_corpus(client):
    response = await client.post("/api/v1/lint", json={"check_links": False})
    assert response.status_code == 200
    data = response.json()
    assert data["passed"] is True
    assert data["total_documents"] == 2
    assert data["corpus_checks"] == []


@pytest.mark.asyncio
async def test_lint_document(client, valid_skill_text):
    response = await client.post("/api/v1/lint/document", json={"content": valid_skill_text})
    assert response.status_code == 200
    data = response.json()
    assert data["passed"] is True
    assert data["name"] == "widget-client"
    assert not [c for c in data["checks"] if c["name"].startswith("link.")]


@pytest.mark.asyncio
async def test_lint_document_with_errors(client):
    content = "---\nname: Bad Name\ndescription: d\nagents: [a]\ntags: [t]\n---\n```python\ndef f(:\n```\n"
    response = await client.post("/api/v1/lint/document", json={"content": content, "strict": True})
    data = response.json()
    assert data["passed"] is False
    failed = sorted(c["name"] for c in data["checks"] if not c["passed"])
    assert failed == ["metadata.name_format", "syntax.code_block"]


@pytest.mark.asyncio
async def test_lint_document_rejects_empty(client):
    response = await client.post("/api/v1/lint/document", json={"content": ""})
    assert response.status_code == 422
