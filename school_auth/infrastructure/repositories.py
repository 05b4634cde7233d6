from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import UserORM
from ..domain.entities import User, validate_user
from ..domain.errors import DUPLICATE_EMAIL, ValidationError
from ..application.ports import IPasswordHasher, IUserRepository


def to_domain(u: UserORM, with_password: bool = False) -> User:
    return User(
        id=u.id,
        name=u.name,
        email=u.email,
        role=u.role,
        tenant_id=u.tenant_id,
        created_at=u.created_at,
        password=u.password_hash if with_password else None,
    )


class UserRepository(IUserRepository):
    """Credential store on top of the ``users`` table.

    Field validation and password hashing happen here, right before a row is
    written, so every write path gets the same rules. Hashing runs only when
    the caller says the password changed.
    """

    def __init__(self, db: Session, hasher: IPasswordHasher):
        self.db = db
        self.hasher = hasher

    def get_by_email(self, email: str, with_password: bool = False) -> User | None:
        row = self.db.query(UserORM).filter(UserORM.email == email).first()
        return to_domain(row, with_password) if row else None

    def get_by_id(self, user_id: str, with_password: bool = False) -> User | None:
        row = self.db.get(UserORM, user_id)
        return to_domain(row, with_password) if row else None

    def create(self, user: User) -> User:
        validate_user(user, password_changed=True)
        self._ensure_email_free(user.email)
        row = UserORM(
            name=user.name,
            email=user.email,
            role=user.role,
            tenant_id=user.tenant_id,
            password_hash=self.hasher.hash(user.password),
        )
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return to_domain(row)

    def save(self, user: User, *, password_changed: bool) -> User:
        row = self.db.get(UserORM, user.id)
        if row is None:
            raise ValidationError(f"No user with id {user.id}")
        validate_user(user, password_changed=password_changed)
        if user.email != row.email:
            self._ensure_email_free(user.email)

        row.name = user.name
        row.email = user.email
        row.role = user.role
        row.tenant_id = user.tenant_id
        if password_changed:
            row.password_hash = self.hasher.hash(user.password)
        self._commit()
        self.db.refresh(row)
        return to_domain(row)

    def _ensure_email_free(self, email: str) -> None:
        exists = self.db.query(UserORM.id).filter(UserORM.email == email).first()
        if exists:
            raise ValidationError(DUPLICATE_EMAIL)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race on the unique email index.
            self.db.rollback()
            raise ValidationError(DUPLICATE_EMAIL)
