from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class UserBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Address = Field(default_factory=Address)


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    # Optional so a missing field yields our own 400 instead of a schema error
    email: Optional[str] = None
    password: Optional[str] = None


class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[Address] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
