import re
from dataclasses import dataclass
from datetime import datetime

from .errors import ValidationError

ROLES = ("super-admin", "admin", "school_admin", "teacher", "student", "parent")
DEFAULT_ROLE = "student"
MIN_PASSWORD_LENGTH = 6
MAX_EMAIL_LENGTH = 254

# ASCII word characters only; each dot or dash must sit between word runs.
EMAIL_RE = re.compile(r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}", re.ASCII)


@dataclass(frozen=True)
class User:
    id: str | None
    name: str | None
    email: str | None
    role: str = DEFAULT_ROLE
    tenant_id: str | None = None
    created_at: datetime | None = None
    # Digest when loaded with_password=True, plaintext while a change is pending.
    password: str | None = None


def validate_user(user: User, *, password_changed: bool) -> None:
    """Raise ValidationError listing every field rule the record breaks.

    The password rules only apply when a new plaintext is about to be stored;
    a stored digest is never re-checked.
    """
    errors: list[str] = []
    if not user.name:
        errors.append("Please add a name")
    if not user.email:
        errors.append("Please add an email")
    elif len(user.email) > MAX_EMAIL_LENGTH or not EMAIL_RE.fullmatch(user.email):
        errors.append("Please add a valid email")
    if user.role not in ROLES:
        errors.append(f"Invalid role: {user.role}")
    if password_changed:
        if not user.password:
            errors.append("Please add a password")
        elif len(user.password) < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not user.tenant_id:
        errors.append("Please add a tenant ID")
    if errors:
        raise ValidationError(", ".join(errors))
