from pydantic import BaseModel
from typing import Literal

Role = Literal["SUPERADMIN", "RECEPTIONIST"]


class SessionUser(BaseModel):
    email: str
    role: Role


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role
