import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import INTERNAL_MATCH_ERROR_MESSAGE, INVALID_RGB_MESSAGE
from app.main import app
from app.services.logic.shade_matcher import ATTRIBUTION, JAWLINE_TIP, shade_matcher

client = TestClient(app)

MATCH_URL = "/api/foundation-match"


def test_health_and_root():
    assert client.get("/health").json() == {"status": "ok", "project": "ShadeMatch"}
    assert client.get("/").json()["docs"] == "/docs"


def test_match_success_shape():
    response = client.post(MATCH_URL, json={"rgb": [235, 200, 170]})

    assert response.status_code == 200
    body = response.json()
    assert body["bestMatch"] == {
        "name": "NC15",
        "rgb": [235, 200, 170],
        "undertone": "neutral-cool",
        "confidence": 100,
    }
    assert [alt["name"] for alt in body["alternativeMatches"]] == ["W2", "NW15", "C2"]
    assert [alt["distance"] for alt in body["alternativeMatches"]] == [0, 15, 15]
    assert body["userUndertone"] == "warm"
    assert body["recommendations"][-2:] == [JAWLINE_TIP, ATTRIBUTION]


def test_match_clamps_out_of_range():
    clamped = client.post(MATCH_URL, json={"rgb": [255, 0, 128]}).json()
    response = client.post(MATCH_URL, json={"rgb": [300, -10, 128]})

    assert response.status_code == 200
    assert response.json() == clamped


def test_match_ignores_extra_fields():
    response = client.post(MATCH_URL, json={"rgb": [190, 155, 125], "x": 10, "y": 20})
    assert response.status_code == 200
    assert response.json()["bestMatch"]["name"] == "NC30"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"rgb": [1, 2]},
        {"rgb": [1, 2, 3, 4]},
        {"rgb": ["a", "b", "c"]},
        {"rgb": None},
        [1, 2, 3],
        "rgb",
    ],
)
def test_match_invalid_rgb(body):
    response = client.post(MATCH_URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_RGB_MESSAGE}


def test_match_missing_body():
    response = client.post(MATCH_URL)

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_RGB_MESSAGE}


def test_match_malformed_json():
    response = client.post(
        MATCH_URL,
        content="{rgb: [1, 2, 3",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_RGB_MESSAGE}


def test_match_internal_failure(monkeypatch):
    def boom(payload):
        raise RuntimeError("catalog exploded")

    monkeypatch.setattr(shade_matcher, "match_request", boom)

    response = client.post(MATCH_URL, json={"rgb": [235, 200, 170]})

    assert response.status_code == 500
    assert response.json() == {"error": INTERNAL_MATCH_ERROR_MESSAGE}


def test_list_shades():
    response = client.get(f"{MATCH_URL}/shades")

    assert response.status_code == 200
    shades = response.json()
    assert len(shades) == 34
    assert shades[0] == {
        "name": "NC15",
        "rgb": [235, 200, 170],
        "undertone": "neutral-cool",
        "hex": "#EBC8AA",
    }


def test_list_shades_by_undertone():
    response = client.get(f"{MATCH_URL}/shades", params={"undertone": "cool"})

    assert response.status_code == 200
    assert [shade["name"] for shade in response.json()] == [f"C{i}" for i in range(1, 9)]


def test_list_shades_unknown_undertone():
    response = client.get(f"{MATCH_URL}/shades", params={"undertone": "olive"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request parameters"}


def test_get_shade_by_name():
    response = client.get(f"{MATCH_URL}/shades/nw43")

    assert response.status_code == 200
    assert response.json()["name"] == "NW43"


def test_get_shade_not_found():
    response = client.get(f"{MATCH_URL}/shades/NC99")

    assert response.status_code == 404
    assert response.json() == {"error": "Shade NC99 not found."}


@pytest.mark.asyncio
async def test_concurrent_matches_are_independent():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as async_client:
        first = await async_client.post(MATCH_URL, json={"rgb": [250, 215, 185]})
        second = await async_client.post(MATCH_URL, json={"rgb": [0, 0, 255]})
        again = await async_client.post(MATCH_URL, json={"rgb": [250, 215, 185]})

    assert first.status_code == second.status_code == 200
    assert first.json() == again.json()
    assert second.json()["userUndertone"] == "cool"
