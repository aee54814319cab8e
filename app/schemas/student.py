from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


# --- Classrooms ---
class Classroom(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return str(value)


# --- Students ---
class Student(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    classroom_id: Optional[str] = None
    name: Optional[str] = None
    classroom: Optional[Classroom] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "classroom_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        if value is None:
            return value
        return str(value)
