from typing import Iterable

import structlog

from ..domain.entities import User
from ..domain.errors import NOT_AUTHORIZED, AuthenticationError, AuthorizationError
from .ports import ITokenSigner, IUserRepository

logger = structlog.get_logger(__name__)


def extract_token(authorization: str | None, cookie_token: str | None) -> str | None:
    """A ``Bearer`` header wins over the cookie, even when it carries no token."""
    if authorization and authorization.startswith("Bearer"):
        parts = authorization.split(" ")
        return parts[1] if len(parts) > 1 and parts[1] else None
    return cookie_token or None


class AccessGuard:
    def __init__(self, repo: IUserRepository, signer: ITokenSigner):
        self.repo = repo
        self.signer = signer

    def resolve(self, authorization: str | None, cookie_token: str | None) -> User:
        token = extract_token(authorization, cookie_token)
        if not token:
            raise AuthenticationError(NOT_AUTHORIZED)

        try:
            claims = self.signer.verify(token)
        except Exception:
            logger.debug("token_rejected")
            raise AuthenticationError(NOT_AUTHORIZED)

        user_id = claims.get("id")
        user = self.repo.get_by_id(str(user_id)) if user_id else None
        if user is None:
            logger.info("token_subject_missing", user_id=user_id)
            raise AuthenticationError(NOT_AUTHORIZED)
        return user

    def authorize(self, user: User, roles: Iterable[str]) -> User:
        if user.role not in tuple(roles):
            raise AuthorizationError(f"User role {user.role} is not authorized to access this route")
        return user
