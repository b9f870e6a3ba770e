from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType

from fastapi.testclient import TestClient

from app.api.v1.dto.mappers import to_recommendation_out
from app.domain.auth.schemas import User
from app.domain.recommendations.schemas import Recommendation


def _user() -> User:
    now = datetime(2026, 2, 10, 14, 0, 0, tzinfo=timezone.utc)
    return User(id=1, email="trader@example.com", is_active=True, created_at=now, updated_at=now)


def test_recommendations_default_to_personalized_path_with_limit_10(
    api_client: TestClient,
    recommendation_service,
) -> None:
    response = api_client.get("/api/v1/recommendations")

    assert response.status_code == 200
    body = response.json()
    assert [item["symbol"] for item in body["data"]] == ["AAPL", "MSFT", "GOOGL"]
    assert body["data"][0] == {
        "symbol": "AAPL",
        "score": 1.0,
        "reasons": ["Related to your watchlist"],
        "metadata": None,
    }
    assert recommendation_service.calls == [("personal", 10, None)]


def test_recommendations_pass_resolved_identity(
    api_client: TestClient,
    recommendation_service,
    identity,
) -> None:
    identity.user = _user()

    response = api_client.get("/api/v1/recommendations", params={"limit": 2})

    assert response.status_code == 200
    kind, limit, user = recommendation_service.calls[0]
    assert (kind, limit) == ("personal", 2)
    assert user is not None and user.email == "trader@example.com"


def test_recommendations_type_popular_forces_popular_path(
    api_client: TestClient,
    recommendation_service,
    identity,
) -> None:
    identity.user = _user()

    response = api_client.get("/api/v1/recommendations", params={"type": "popular", "limit": 5})

    assert response.status_code == 200
    assert response.json()["data"][0]["reasons"] == ["Popular among users"]
    assert recommendation_service.calls == [("popular", 5, None)]


def test_recommendations_clamp_limit(
    api_client: TestClient,
    recommendation_service,
) -> None:
    api_client.get("/api/v1/recommendations", params={"limit": 500})
    api_client.get("/api/v1/recommendations", params={"limit": 0})
    api_client.get("/api/v1/recommendations", params={"limit": -3})

    assert [call[1] for call in recommendation_service.calls] == [50, 1, 1]


def test_recommendations_unexpected_failure_returns_error_envelope(
    api_client: TestClient,
    recommendation_service,
) -> None:
    recommendation_service.fail = True

    response = api_client.get("/api/v1/recommendations")

    assert response.status_code == 500
    assert response.json() == {
        "error": {
            "code": "RECOMMENDATIONS_UNAVAILABLE",
            "message": "Failed to get recommendations",
        }
    }


def test_health(api_client: TestClient) -> None:
    response = api_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_recommendation_metadata_is_serialized_as_plain_dict() -> None:
    item = Recommendation(
        symbol="NFLX",
        score=0.2,
        reasons=("Popular among users",),
        metadata=MappingProxyType({"recent_activity": True}),
    )

    out = to_recommendation_out(item)

    assert out.model_dump() == {
        "symbol": "NFLX",
        "score": 0.2,
        "reasons": ["Popular among users"],
        "metadata": {"recent_activity": True},
    }
