"""
Pydantic schemas for user responses.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from landlord_api.models.user import UserRole


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    id: int = Field(..., description="User's unique identifier")
    email: str = Field(..., description="User's email address (lowercased)")
    name: str = Field(..., description="User's display name")
    role: UserRole = Field(..., description="User's role")
    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")
