from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str
    requires_verification: bool = False
