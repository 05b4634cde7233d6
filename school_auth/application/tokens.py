from datetime import timedelta

from ..domain.entities import User
from .ports import ITokenSigner


class SessionTokenIssuer:
    """Signs the session token handed out by register, login and password change."""

    def __init__(self, signer: ITokenSigner, ttl: timedelta):
        self.signer = signer
        self.ttl = ttl

    def issue(self, user: User) -> str:
        claims = {
            "id": user.id,
            "name": user.name,
            "role": user.role,
            "tenantId": user.tenant_id,
        }
        return self.signer.sign(claims, self.ttl)
