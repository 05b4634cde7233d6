from dataclasses import replace

import structlog

from ...config import Settings
from ...domain.entities import User
from ..ports import IUserRepository

logger = structlog.get_logger(__name__)

SEED_ROLE = "super-admin"


class SeedAdmin:
    """Ensure the configured super-admin account exists.

    An existing account keeps its password; only role and name are reset.
    """

    def __init__(self, repo: IUserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    def execute(self) -> tuple[User, bool]:
        s = self.settings
        existing = self.repo.get_by_email(s.ADMIN_EMAIL)
        if existing is not None:
            user = self.repo.save(
                replace(existing, role=SEED_ROLE, name=s.ADMIN_NAME),
                password_changed=False,
            )
            logger.info("admin_updated", user_id=user.id)
            return user, False

        user = self.repo.create(
            User(
                id=None,
                name=s.ADMIN_NAME,
                email=s.ADMIN_EMAIL,
                role=SEED_ROLE,
                tenant_id=s.ADMIN_TENANT_ID,
                password=s.ADMIN_PASSWORD,
            )
        )
        logger.info("admin_created", user_id=user.id)
        return user, True
