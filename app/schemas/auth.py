from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


# --- Actor (auth.users.id -> profiles.id) ---
class Actor(BaseModel):
    id: str  # auth.users.id
    role: Role
    classroom_id: Optional[str] = None

    @field_validator("id", "classroom_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        # profiles may store integer or uuid keys
        if value is None:
            return value
        return str(value)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value
