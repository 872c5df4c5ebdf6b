"""
Pydantic schemas for users, registration and login.
"""

from typing import List
from pydantic import EmailStr, Field

from jobly.schemas.base import CamelModel, RequestModel


class UserRegister(RequestModel):
    """Request schema for self-registration (never an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserNew(UserRegister):
    """Request schema for an admin creating a user, possibly another admin."""
    is_admin: bool = False


class UserUpdate(RequestModel):
    """Partial update of a user's own profile; username and admin flag are fixed."""
    # Every column here is NOT NULL, so null is rejected rather than stored
    password: str = Field(None, min_length=5, max_length=72)
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    email: EmailStr = None


class UserLogin(RequestModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class User(CamelModel):
    """User profile (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(User):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class TokenResponse(CamelModel):
    token: str


class UserResponse(CamelModel):
    user: User


class UserDetailResponse(CamelModel):
    user: UserDetail


class UserTokenResponse(CamelModel):
    user: User
    token: str


class UserListResponse(CamelModel):
    users: List[User]
