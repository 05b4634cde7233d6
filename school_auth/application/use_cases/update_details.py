from dataclasses import replace

import structlog

from ...domain.entities import User
from ...domain.errors import NOT_AUTHORIZED, AuthenticationError
from ..dto import UpdateDetailsInput
from ..ports import IUserRepository

logger = structlog.get_logger(__name__)


class UpdateUserDetails:
    """Change the acting user's name and/or email. Nothing else is writable here."""

    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, user_id: str, data: UpdateDetailsInput) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError(NOT_AUTHORIZED)

        changes = {k: v for k, v in (("name", data.name), ("email", data.email)) if v is not None}
        updated = self.repo.save(replace(user, **changes), password_changed=False)
        logger.info("user_details_updated", user_id=user_id, fields=sorted(changes))
        return updated
