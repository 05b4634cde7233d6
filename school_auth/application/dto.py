from dataclasses import dataclass


@dataclass
class RegisterUserInput:
    name: str | None
    email: str | None
    password: str | None
    tenant_id: str | None
    role: str | None = None


@dataclass
class UpdateDetailsInput:
    name: str | None = None
    email: str | None = None


@dataclass
class UpdatePasswordInput:
    current_password: str | None
    new_password: str | None
