from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import settings

pwd = CryptContext(schemes=[settings.PASSWORD_SCHEME], deprecated="auto")


class PasswordHasher:
    def __init__(self, context: CryptContext = pwd):
        self.context = context

    def hash(self, plain: str) -> str:
        return self.context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        if not plain or not hashed:
            return False
        try:
            return self.context.verify(plain, hashed)
        except (ValueError, TypeError):
            # Unrecognised or corrupted digest.
            return False


class JoseTokenSigner:
    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm

    def sign(self, claims: dict[str, Any], ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = dict(claims)
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int((now + ttl).timestamp())
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Return the claims or raise JWTError (bad signature, expired, malformed)."""
        payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        if not payload.get("id"):
            raise JWTError("No subject")
        return payload
