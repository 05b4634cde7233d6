"""Create (or reset role/name of) the super-admin account.

Usage:
  school-auth-seed-admin

Reads ADMIN_NAME / ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_TENANT_ID and
DATABASE_URL from the environment or .env.
"""

from ..application.use_cases.seed_admin import SeedAdmin
from ..config import settings
from ..infrastructure.db import SessionLocal, engine
from ..infrastructure.models import Base
from ..infrastructure.repositories import UserRepository
from ..infrastructure.security import PasswordHasher


def seed_admin() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user, created = SeedAdmin(UserRepository(db, PasswordHasher()), settings).execute()
    finally:
        db.close()

    if created:
        print("Super Admin created successfully!")
        print(f"Email: {user.email}")
    else:
        print(f"Admin already exists. Updated {user.email} to {user.role} with name {user.name!r}.")


if __name__ == "__main__":
    seed_admin()
