from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    is_active: bool = True

    @field_validator("name", "position", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StaffUpdate(StaffCreate):
    pass


class StaffResponse(BaseModel):
    id: int
    name: str
    position: str
    email: Optional[str]
    phone: Optional[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
