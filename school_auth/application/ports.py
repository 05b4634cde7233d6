from datetime import timedelta
from typing import Any

from ..domain.entities import User


class IUserRepository:
    def get_by_email(self, email: str, with_password: bool = False) -> User | None: ...
    def get_by_id(self, user_id: str, with_password: bool = False) -> User | None: ...
    def create(self, user: User) -> User: ...
    def save(self, user: User, *, password_changed: bool) -> User: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...


class ITokenSigner:
    def sign(self, claims: dict[str, Any], ttl: timedelta) -> str: ...
    def verify(self, token: str) -> dict[str, Any]: ...
