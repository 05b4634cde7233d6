import re
from datetime import timedelta

from pydantic_settings import BaseSettings

_DURATION = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse ``30d`` / ``12h`` / ``15m`` / ``45s`` / ``3600`` into a timedelta."""
    m = _DURATION.match(str(value).lower())
    if not m:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = m.groups()
    return timedelta(**{_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./school_auth.db"
    JWT_SECRET: str = "dev-secret-auth"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE: str = "30d"
    COOKIE_EXPIRE: int = 30  # days
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PASSWORD_SCHEME: str = "pbkdf2_sha256"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    LOGIN_RATE_LIMIT_PER_MINUTE: int = 10
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    FRONTEND_URL: str = "http://localhost:3000"

    ADMIN_NAME: str = "Super Admin"
    ADMIN_EMAIL: str = "admin@cityschool.com"
    ADMIN_PASSWORD: str = "adminpassword123"
    ADMIN_TENANT_ID: str = "HQ-GLOBAL"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRE)

    @property
    def cookie_ttl(self) -> timedelta:
        return timedelta(days=self.COOKIE_EXPIRE)


settings = Settings()


def get_settings() -> Settings:
    return settings
