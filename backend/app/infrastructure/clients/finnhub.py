from __future__ import annotations

from typing import Any

import httpx


class FinnhubClientError(RuntimeError):
    """Raised when the Finnhub API cannot serve a request."""


class FinnhubClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://finnhub.io/api/v1",
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Finnhub API key is not configured")
        self.api_key = api_key
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    def get_company_profile(self, *, symbol: str) -> dict[str, Any] | None:
        payload = self._get("/stock/profile2", params={"symbol": symbol.strip().upper()})
        if not isinstance(payload, dict) or not payload:
            return None
        return payload

    def get_exchange(self, *, symbol: str) -> str | None:
        profile = self.get_company_profile(symbol=symbol)
        if profile is None:
            return None
        exchange = profile.get("exchange")
        return str(exchange) if exchange else None

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, *, params: dict[str, Any]) -> Any:
        try:
            response = self._client.get(path, params={**params, "token": self.api_key})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FinnhubClientError(f"Finnhub responded with HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FinnhubClientError("Finnhub request failed") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise FinnhubClientError("Finnhub returned invalid JSON") from exc
