import structlog

from ...domain.entities import DEFAULT_ROLE, User
from ..dto import RegisterUserInput
from ..ports import IUserRepository
from ..tokens import SessionTokenIssuer

logger = structlog.get_logger(__name__)


class RegisterUser:
    def __init__(self, repo: IUserRepository, tokens: SessionTokenIssuer):
        self.repo = repo
        self.tokens = tokens

    def execute(self, data: RegisterUserInput) -> str:
        user = self.repo.create(
            User(
                id=None,
                name=data.name,
                email=data.email,
                role=data.role if data.role is not None else DEFAULT_ROLE,
                tenant_id=data.tenant_id,
                password=data.password,
            )
        )
        logger.info("user_registered", user_id=user.id, role=user.role, tenant_id=user.tenant_id)
        return self.tokens.issue(user)
