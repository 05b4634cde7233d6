import structlog

from ...domain.errors import (
    INVALID_CREDENTIALS,
    MISSING_CREDENTIALS,
    AuthenticationError,
    ValidationError,
)
from ..ports import IPasswordHasher, IUserRepository
from ..tokens import SessionTokenIssuer

logger = structlog.get_logger(__name__)


class LoginUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher, tokens: SessionTokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, email: str | None, password: str | None) -> str:
        if not email or not password:
            raise ValidationError(MISSING_CREDENTIALS)

        user = self.repo.get_by_email(email, with_password=True)
        # Unknown email and wrong password must stay indistinguishable.
        if user is None or not user.password or not self.hasher.verify(password, user.password):
            logger.warning("login_failed")
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("login_succeeded", user_id=user.id, tenant_id=user.tenant_id)
        return self.tokens.issue(user)
