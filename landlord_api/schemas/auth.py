"""
Pydantic schemas for authentication requests and responses.
Handles registration, login and the token response.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from landlord_api.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """
    Registration request schema.
    Password length is checked by AuthService so the policy lives in one place.
    """

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")
    name: str = Field(..., max_length=100, description="User's display name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class RegisterResponse(BaseModel):
    message: str = "User created successfully"
    user: UserResponse


class LoginRequest(BaseModel):
    """Login request schema. Bad credentials of any shape yield 401, not 400."""

    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")


class LoginResponse(BaseModel):
    """Login response with user information and access token."""

    user: UserResponse
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds")
