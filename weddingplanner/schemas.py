from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: int
    email: str
    firstName: str
    lastName: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str


def user_to_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        firstName=user.first_name,
        lastName=user.last_name,
        role=user.role,
        created_at=user.created_at,
    )
