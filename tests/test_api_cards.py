"""Tests for the card data endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from sorcerify.api.deps import get_cards
from sorcerify.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestListCards:
    async def test_returns_camel_case_records(self, client: AsyncClient, sample_cards) -> None:
        app.dependency_overrides[get_cards] = lambda: sample_cards

        response = await client.get("/cards")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data] == ["Fire Drake", "Sorcerer", "Alpha Wolf"]
        assert data[0]["guardian"]["rulesText"] == "Breathes (F)(1) and roars ①"
        assert data[0]["subTypes"] == "Dragon"

    async def test_empty_card_set_is_503(self, client: AsyncClient, monkeypatch) -> None:
        monkeypatch.setattr("sorcerify.api.deps.get_card_database", lambda: ())

        response = await client.get("/cards")

        assert response.status_code == 503
        assert response.json()["detail"] == "No cards are available."
