from dataclasses import replace

import structlog

from ...domain.errors import NOT_AUTHORIZED, WRONG_CURRENT_PASSWORD, AuthenticationError
from ..dto import UpdatePasswordInput
from ..ports import IPasswordHasher, IUserRepository
from ..tokens import SessionTokenIssuer

logger = structlog.get_logger(__name__)


class UpdateUserPassword:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher, tokens: SessionTokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, user_id: str, data: UpdatePasswordInput) -> str:
        user = self.repo.get_by_id(user_id, with_password=True)
        if user is None:
            raise AuthenticationError(NOT_AUTHORIZED)

        current = data.current_password or ""
        if not user.password or not self.hasher.verify(current, user.password):
            logger.warning("password_update_rejected", user_id=user_id)
            raise AuthenticationError(WRONG_CURRENT_PASSWORD)

        saved = self.repo.save(replace(user, password=data.new_password), password_changed=True)
        logger.info("password_updated", user_id=user_id)
        return self.tokens.issue(saved)
