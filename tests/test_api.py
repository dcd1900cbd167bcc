"""Tests for the HTTP API."""

import base64

from fastapi.testclient import TestClient

from meal_snap.api.app import create_app
from meal_snap.services.analysis import AnalysisConfig, AnalysisService
from meal_snap.services.vision import VisionService
from tests.conftest import FailingVisionClient, FakeVisionClient

IMAGE = base64.b64encode(b"\xff\xd8\xffimage").decode()


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_food_returns_record(container, vision_client: FakeVisionClient) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 200
    data = response.json()
    assert data["totals"] == {"calories": 381, "protein": 36, "carbs": 45, "fat": 5}
    assert data["foods"] == ["Chicken", "Rice"]
    assert data["foodDetails"][1]["carbs"] == 45
    assert vision_client.calls[0].startswith("data:image/jpeg;base64,")


def test_analyze_food_accepts_data_url(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/analyze-food", json={"image": f"data:image/jpeg;base64,{IMAGE}"}
    )

    assert response.status_code == 200


def test_analyze_food_requires_image(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Image data is required"}


def test_analyze_food_rejects_invalid_base64(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": "not base64!"})

    assert response.status_code == 400
    assert response.json()["error"] == "Image data is not valid base64"


def test_analyze_food_reports_analysis_errors(container) -> None:
    container.analysis_service = AnalysisService(
        config=AnalysisConfig(vision_api_key="key"),
        vision_service=VisionService(client=FailingVisionClient()),
    )
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to analyze food image"
    assert "connection refused" in data["details"]


def test_analyze_food_reports_malformed_payload(container) -> None:
    container.analysis_service = AnalysisService(
        config=AnalysisConfig(vision_api_key="key"),
        vision_service=VisionService(client=FakeVisionClient(payload={"items": []})),
    )
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to analyze food image"


def test_analyze_food_mock_mode(container, mock_analysis_service) -> None:
    container.analysis_service = mock_analysis_service
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 200
    assert len(response.json()["foods"]) in {2, 3}


def test_manual_entry_returns_record(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/manual-entry",
        json={
            "foodItems": [
                {"name": "Pasta", "calories": "350", "carbs": 70, "portion": ""},
                {"name": " ", "calories": "10"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["foods"] == ["Pasta"]
    assert data["totals"]["carbs"] == 70
    assert data["foodDetails"][0]["portion"] == "Standard serving"


def test_manual_entry_requires_named_item(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/manual-entry", json={"foodItems": [{"name": ""}]})

    assert response.status_code == 400
    assert response.json() == {"error": "Please add at least one food item"}


def test_analyze_food_rejects_wrong_body_type(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": 123})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid request body"
    assert "image" in data["details"]


def test_manual_entry_rejects_non_text_values(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/manual-entry",
        json={"foodItems": [{"name": "Soup", "calories": ["100"]}]},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_manual_entry_handles_huge_values(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/manual-entry",
        json={
            "foodItems": [
                {"name": "a", "calories": "1e308"},
                {"name": "b", "calories": "1e308"},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json()["totals"]["calories"] == 2_000_000_000


def test_analyze_food_accepts_wrapped_base64(container) -> None:
    client = TestClient(create_app(container))
    wrapped = "\n".join(IMAGE[i : i + 4] for i in range(0, len(IMAGE), 4))

    response = client.post("/api/analyze-food", json={"image": wrapped + "\r\n"})

    assert response.status_code == 200
    assert response.json()["foods"] == ["Chicken", "Rice"]
