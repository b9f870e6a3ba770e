from __future__ import annotations

from app.domain.watchlist.errors import InvalidSymbolError

TRADINGVIEW_EXCHANGES = ("NASDAQ", "NYSE", "AMEX", "OTC")
DEFAULT_EXCHANGE = "US"

# Order matters: "NYSE AMERICAN" must not be caught by the NYSE rule first,
# so the AMEX aliases are checked against the raw name before NYSE.
_EXCHANGE_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("NASDAQ", ("NASDAQ",)),
    ("AMEX", ("NYSE AMERICAN", "AMEX", "AMERICAN STOCK EXCHANGE")),
    ("NYSE", ("NEW YORK STOCK EXCHANGE", "NYSE")),
    ("OTC", ("OTC",)),
)


def normalize_symbol(raw: str | None) -> str:
    """Strip any ``EXCHANGE:`` prefix, trim and uppercase a ticker."""
    value = (raw or "").strip()
    if ":" in value:
        value = value.rsplit(":", maxsplit=1)[-1]
    normalized = value.strip().upper()
    if not normalized:
        raise InvalidSymbolError()
    return normalized


def exchange_prefix(raw: str | None) -> str | None:
    value = (raw or "").strip().upper()
    if ":" not in value:
        return None
    prefix = value.split(":", maxsplit=1)[0].strip()
    return prefix or None


def normalize_tv_symbol(raw: str | None) -> str | None:
    value = (raw or "").strip().upper()
    return value or None


def map_provider_exchange_to_tradingview(exchange: str | None) -> str | None:
    raw = (exchange or "").strip().upper()
    if not raw:
        return None
    for code, aliases in _EXCHANGE_ALIASES:
        if any(alias in raw for alias in aliases):
            return code
    return None


def build_tradingview_symbol(symbol: str, exchange: str | None) -> str | None:
    clean = (symbol or "").strip().upper()
    if not clean:
        return None
    if ":" in clean:
        return clean
    if not exchange:
        return None
    return f"{exchange}:{clean}"
