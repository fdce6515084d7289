"""
Pydantic schemas for registration, login, and tokens.
"""

from pydantic import BaseModel, Field, EmailStr

from bank_api.schemas.user import AccountResponse


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9]+$")
    password: str = Field(min_length=6, max_length=128)
    email: EmailStr


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)


class TokenUser(BaseModel):
    """The caller identity carried by a verified token."""
    user_id: int
    username: str


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    user: AccountResponse


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: AccountResponse


class VerifyResponse(BaseModel):
    message: str = "Valid token"
    user: TokenUser
