from fastapi import Depends, Header, Request

from ...application.access_guard import AccessGuard
from ...domain.entities import User
from .deps import get_access_guard
from .responses import COOKIE_NAME


def protect(
    request: Request,
    authorization: str | None = Header(default=None),
    guard: AccessGuard = Depends(get_access_guard),
) -> User:
    """Resolve the caller from the Bearer header or the ``token`` cookie."""
    user = guard.resolve(authorization, request.cookies.get(COOKIE_NAME))
    request.state.user = user
    return user


def authorize(*roles: str):
    """Dependency factory: ``Depends(authorize("admin", "super-admin"))``. Runs after protect."""
    def _authorize(
        user: User = Depends(protect),
        guard: AccessGuard = Depends(get_access_guard),
    ) -> User:
        return guard.authorize(user, roles)
    return _authorize
