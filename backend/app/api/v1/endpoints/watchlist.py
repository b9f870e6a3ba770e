from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, get_watchlist_service
from app.api.errors import raise_api_error
from app.api.v1.dto.mappers import to_watchlist_item_out, to_watchlist_mutation_out
from app.api.v1.dto.watchlist import (
    WatchlistItemCreate,
    WatchlistItemOut,
    WatchlistMembershipOut,
    WatchlistMutationOut,
)
from app.application.watchlist.service import WatchlistApplicationService
from app.domain.auth.schemas import User
from app.domain.watchlist.errors import InvalidSymbolError
from app.domain.watchlist.symbols import normalize_symbol

router = APIRouter()


@router.get("", response_model=list[WatchlistItemOut])
def list_watchlist(
    current_user: User = Depends(get_current_user),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> list[WatchlistItemOut]:
    items = service.list_items(user=current_user)
    return [to_watchlist_item_out(item) for item in items]


@router.post("", response_model=WatchlistMutationOut)
def add_watchlist_item(
    payload: WatchlistItemCreate,
    current_user: User = Depends(get_current_user),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistMutationOut:
    try:
        result = service.add_item(
            user=current_user,
            symbol=payload.symbol,
            company=payload.company,
            tv_symbol=payload.tv_symbol,
        )
    except InvalidSymbolError as exc:
        _raise_invalid_symbol(exc)
    return to_watchlist_mutation_out(result)


@router.delete("/{symbol}", response_model=WatchlistMutationOut)
def delete_watchlist_item(
    symbol: str,
    current_user: User = Depends(get_current_user),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistMutationOut:
    try:
        result = service.remove_item(user=current_user, symbol=symbol)
    except InvalidSymbolError as exc:
        _raise_invalid_symbol(exc)
    return to_watchlist_mutation_out(result)


@router.get("/{symbol}/membership", response_model=WatchlistMembershipOut)
def get_membership(
    symbol: str,
    current_user: User = Depends(get_current_user),
    service: WatchlistApplicationService = Depends(get_watchlist_service),
) -> WatchlistMembershipOut:
    try:
        clean_symbol = normalize_symbol(symbol)
    except InvalidSymbolError as exc:
        _raise_invalid_symbol(exc)
    return WatchlistMembershipOut(
        symbol=clean_symbol,
        in_watchlist=service.is_member(user=current_user, symbol=clean_symbol),
    )


def _raise_invalid_symbol(exc: InvalidSymbolError) -> NoReturn:
    raise_api_error(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="INVALID_SYMBOL",
        message=str(exc),
    )
