"""Envelope and cookie helpers shared by the auth routes.

Tokens go out twice on purpose: in the JSON body for bearer clients and in an
httpOnly cookie for browser clients.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Response

from ...config import Settings
from ...domain.entities import User
from .schemas import Envelope, UserResp

COOKIE_NAME = "token"
LOGOUT_SENTINEL = "none"
LOGOUT_COOKIE_TTL = timedelta(seconds=10)


def send_token_response(response: Response, token: str, settings: Settings) -> Envelope:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        expires=datetime.now(timezone.utc) + settings.cookie_ttl,
        httponly=True,
        secure=settings.is_production,
        path="/",
        samesite="lax",
    )
    return Envelope(success=True, token=token)


def clear_token_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=LOGOUT_SENTINEL,
        expires=datetime.now(timezone.utc) + LOGOUT_COOKIE_TTL,
        httponly=True,
        secure=settings.is_production,
        path="/",
        samesite="lax",
    )


def user_envelope(user: User) -> Envelope:
    data = UserResp.model_validate(user).model_dump(mode="json", by_alias=True)
    return Envelope(success=True, data=data)
