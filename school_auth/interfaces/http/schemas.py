from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

class RegisterReq(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    tenant_id: str | None = Field(default=None, alias="tenantId")
    class Config: populate_by_name = True

class LoginReq(BaseModel):
    email: str | None = None
    password: str | None = None

class UpdateDetailsReq(BaseModel):
    name: str | None = None
    email: str | None = None

class UpdatePasswordReq(BaseModel):
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")
    class Config: populate_by_name = True

class UserResp(BaseModel):
    id: str
    name: str
    email: str
    role: str
    tenant_id: str = Field(serialization_alias="tenantId")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    class Config: from_attributes = True

class Envelope(BaseModel):
    success: bool
    data: Any | None = None
    token: str | None = None
    error: str | None = None
