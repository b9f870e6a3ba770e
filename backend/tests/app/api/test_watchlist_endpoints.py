from __future__ import annotations

from fastapi.testclient import TestClient


def test_add_list_and_remove_watchlist_item(api_client: TestClient, watchlist_service) -> None:
    created = api_client.post(
        "/api/v1/watchlist",
        json={"symbol": "nasdaq:aapl", "company": "Apple Inc.", "tv_symbol": "NASDAQ:AAPL"},
    )
    duplicate = api_client.post("/api/v1/watchlist", json={"symbol": "AAPL", "company": "Apple Inc."})
    listed = api_client.get("/api/v1/watchlist")

    assert created.status_code == 200
    assert created.json() == {"success": True, "message": "Added to watchlist"}
    assert duplicate.json() == {"success": False, "message": "Already in watchlist"}
    assert listed.json() == [
        {
            "symbol": "AAPL",
            "company": "Apple Inc.",
            "exchange": "NASDAQ",
            "tv_symbol": "NASDAQ:AAPL",
            "added_at": "2026-02-10T14:00:00Z",
        }
    ]

    removed = api_client.delete("/api/v1/watchlist/aapl")
    missing = api_client.delete("/api/v1/watchlist/aapl")

    assert removed.json() == {"success": True, "message": "Removed from watchlist"}
    assert missing.json() == {"success": False, "message": "Not found in watchlist"}
    assert watchlist_service.changed == 2


def test_watchlist_membership(api_client: TestClient) -> None:
    api_client.post("/api/v1/watchlist", json={"symbol": "MSFT", "company": "Microsoft"})

    member = api_client.get("/api/v1/watchlist/msft/membership")
    stranger = api_client.get("/api/v1/watchlist/TSLA/membership")

    assert member.json() == {"symbol": "MSFT", "in_watchlist": True}
    assert stranger.json() == {"symbol": "TSLA", "in_watchlist": False}


def test_blank_symbol_is_rejected_with_error_envelope(api_client: TestClient) -> None:
    response = api_client.post("/api/v1/watchlist", json={"symbol": "   ", "company": "Nothing"})

    assert response.status_code == 400
    assert response.json() == {"error": {"code": "INVALID_SYMBOL", "message": "Invalid symbol"}}


def test_watchlist_requires_bearer_token(anonymous_client: TestClient) -> None:
    missing = anonymous_client.get("/api/v1/watchlist")
    invalid = anonymous_client.get("/api/v1/watchlist", headers={"Authorization": "Bearer nope"})
    valid = anonymous_client.get("/api/v1/watchlist", headers={"Authorization": "Bearer token-123"})

    assert missing.status_code == 401
    assert missing.headers["WWW-Authenticate"] == "Bearer"
    assert invalid.status_code == 401
    assert valid.status_code == 200
    assert valid.json() == []


def test_unauthenticated_error_uses_envelope(anonymous_client: TestClient) -> None:
    response = anonymous_client.get("/api/v1/watchlist")

    assert response.json() == {
        "error": {
            "code": "NOT_AUTHENTICATED",
            "message": "Authentication credentials were not provided",
        }
    }


def test_validation_errors_use_envelope(api_client: TestClient) -> None:
    response = api_client.post("/api/v1/watchlist", json={"company": "No symbol"})

    assert response.status_code == 422
    body = response.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"][0]["loc"] == ["body", "symbol"]
