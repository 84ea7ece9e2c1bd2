"""API tests for the SEO content spinner endpoint."""

from httpx import AsyncClient

from aerotravel.content.spinner import ContentSpinner
from aerotravel.server.main import app
from aerotravel.server.services.content import get_content_spinner

BASE = "/api/v1/content/spin"


async def test_spin_with_llm_reply(client: AsyncClient):
    response = await client.post(BASE, json={"topic": "Labuan Bajo", "keywords": ["labuan bajo"]})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "ai"
    assert body["title"] == "Pesona Labuan Bajo"
    assert body["slug"] == "pesona-labuan-bajo"
    assert len(body["meta_description"]) <= 160


async def test_spin_falls_back_when_llm_fails(client: AsyncClient, scripted_agent_factory):
    app.dependency_overrides[get_content_spinner] = lambda: ContentSpinner(
        agent_factory=scripted_agent_factory(error="quota exceeded")
    )

    response = await client.post(BASE, json={"topic": "Raja Ampat", "locale": "en"})

    assert response.status_code == 200
    assert response.json()["source"] == "fallback"
    assert response.json()["title"] == "Raja Ampat: Complete Travel Guide"


async def test_spin_validation(client: AsyncClient):
    assert (await client.post(BASE, json={"topic": ""})).status_code == 422
    assert (await client.post(BASE, json={"topic": "Bali", "locale": "fr"})).status_code == 422
    assert (await client.post(BASE, json={"topic": "Bali", "target_word_count": 50})).status_code == 422
