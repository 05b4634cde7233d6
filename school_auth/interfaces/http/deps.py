from fastapi import Depends
from sqlalchemy.orm import Session

from ...application.access_guard import AccessGuard
from ...application.tokens import SessionTokenIssuer
from ...config import Settings, get_settings
from ...infrastructure.db import get_db
from ...infrastructure.repositories import UserRepository
from ...infrastructure.security import JoseTokenSigner, PasswordHasher


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_user_repository(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserRepository:
    return UserRepository(db, hasher)


def get_token_signer(settings: Settings = Depends(get_settings)) -> JoseTokenSigner:
    return JoseTokenSigner(settings.JWT_SECRET, settings.JWT_ALGORITHM)


def get_token_issuer(
    signer: JoseTokenSigner = Depends(get_token_signer),
    settings: Settings = Depends(get_settings),
) -> SessionTokenIssuer:
    return SessionTokenIssuer(signer, settings.token_ttl)


def get_access_guard(
    repo: UserRepository = Depends(get_user_repository),
    signer: JoseTokenSigner = Depends(get_token_signer),
) -> AccessGuard:
    return AccessGuard(repo, signer)
