from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_service, get_current_user
from app.api.errors import raise_api_error
from app.api.v1.dto.auth import (
    AccessTokenOut,
    LoginRequest,
    PasswordResetConfirm,
    PasswordResetOut,
    PasswordResetRequest,
    RegisterRequest,
    UserOut,
    UserPreferencesIn,
    UserPreferencesOut,
)
from app.api.v1.dto.mappers import to_access_token_out, to_user_out, to_user_preferences_out
from app.application.auth.service import AuthApplicationService
from app.domain.auth.constants import ERROR_EMAIL_ALREADY_REGISTERED, ERROR_USER_NOT_FOUND
from app.domain.auth.preferences import normalize_preferences
from app.domain.auth.schemas import User, UserPreferences

router = APIRouter()

PASSWORD_RESET_REQUESTED_MESSAGE = "If an account exists for this email, a reset link has been sent."
PASSWORD_RESET_DONE_MESSAGE = "Password updated"


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: AuthApplicationService = Depends(get_auth_service),
) -> UserOut:
    try:
        preferences = normalize_preferences(
            full_name=payload.full_name,
            country=payload.country,
            investment_goals=payload.investment_goals,
            risk_tolerance=payload.risk_tolerance,
            preferred_industry=payload.preferred_industry,
        )
        user = service.register(email=payload.email, password=payload.password, preferences=preferences)
    except ValueError as exc:
        detail = str(exc)
        if detail == ERROR_EMAIL_ALREADY_REGISTERED:
            raise_api_error(status_code=status.HTTP_409_CONFLICT, code="EMAIL_ALREADY_REGISTERED", message=detail)
        raise_api_error(status_code=status.HTTP_400_BAD_REQUEST, code="INVALID_REGISTRATION", message=detail)
    return to_user_out(user)


@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginRequest,
    service: AuthApplicationService = Depends(get_auth_service),
) -> AccessTokenOut:
    try:
        token = service.login(email=payload.email, password=payload.password)
    except ValueError as exc:
        raise_api_error(status_code=status.HTTP_401_UNAUTHORIZED, code="INVALID_CREDENTIALS", message=str(exc))
    return to_access_token_out(token)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> UserOut:
    return to_user_out(current_user)


@router.get("/me/preferences", response_model=UserPreferencesOut)
def get_preferences(
    current_user: User = Depends(get_current_user),
    service: AuthApplicationService = Depends(get_auth_service),
) -> UserPreferencesOut:
    try:
        preferences = service.get_preferences(user_id=current_user.id)
    except ValueError as exc:
        raise_api_error(status_code=status.HTTP_404_NOT_FOUND, code="USER_NOT_FOUND", message=str(exc))
    return to_user_preferences_out(preferences)


@router.put("/me/preferences", response_model=UserPreferencesOut)
def update_preferences(
    payload: UserPreferencesIn,
    current_user: User = Depends(get_current_user),
    service: AuthApplicationService = Depends(get_auth_service),
) -> UserPreferencesOut:
    preferences = UserPreferences(
        full_name=payload.full_name,
        country=payload.country,
        investment_goals=payload.investment_goals,
        risk_tolerance=payload.risk_tolerance,
        preferred_industry=payload.preferred_industry,
    )
    try:
        updated = service.update_preferences(user_id=current_user.id, preferences=preferences)
    except ValueError as exc:
        detail = str(exc)
        if detail == ERROR_USER_NOT_FOUND:
            raise_api_error(status_code=status.HTTP_404_NOT_FOUND, code="USER_NOT_FOUND", message=detail)
        raise_api_error(status_code=status.HTTP_400_BAD_REQUEST, code="INVALID_PREFERENCES", message=detail)
    return to_user_preferences_out(updated)


@router.post("/password-reset/request", response_model=PasswordResetOut, status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(
    payload: PasswordResetRequest,
    service: AuthApplicationService = Depends(get_auth_service),
) -> PasswordResetOut:
    try:
        service.request_password_reset(email=payload.email)
    except ValueError as exc:
        raise_api_error(status_code=status.HTTP_400_BAD_REQUEST, code="INVALID_EMAIL", message=str(exc))
    return PasswordResetOut(success=True, message=PASSWORD_RESET_REQUESTED_MESSAGE)


@router.post("/password-reset/confirm", response_model=PasswordResetOut)
def confirm_password_reset(
    payload: PasswordResetConfirm,
    service: AuthApplicationService = Depends(get_auth_service),
) -> PasswordResetOut:
    try:
        email = service.reset_password(token=payload.token, new_password=payload.new_password)
    except ValueError as exc:
        raise_api_error(status_code=status.HTTP_400_BAD_REQUEST, code="PASSWORD_RESET_INVALID", message=str(exc))
    return PasswordResetOut(success=True, message=PASSWORD_RESET_DONE_MESSAGE, email=email)
