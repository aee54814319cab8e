from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
import datetime
from app.schemas.student import Student


# --- Reports ---
class Report(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    student_id: str
    description: str
    date: datetime.date
    student: Optional[Student] = None

    @field_validator("id", "student_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        return str(value)


class ReportCreate(BaseModel):
    # The report date is always set server side, so a client supplied
    # "date" (or anything else) is dropped here.
    model_config = ConfigDict(extra="ignore")

    student_id: Optional[str] = None
    description: Optional[str] = None

    @field_validator("student_id", mode="before")
    @classmethod
    def stringify_student_id(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)


class ReportFilters(BaseModel):
    classroom: Optional[str] = None
    date: Optional[datetime.date] = None


# --- Pagination ---
class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int
    per_page: int
    total: int
    last_page: int
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None


class ReportPage(BaseModel):
    items: List[Report]
    pagination: Pagination


class ReportListResponse(BaseModel):
    message: str
    data: List[Report]
    pagination: Pagination


# --- Analytics ---
class MonthCount(BaseModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    month_name: str
    count: int = Field(..., ge=0)


class AnalyticsPoint(BaseModel):
    month: str
    student: int


class AnalyticsResponse(BaseModel):
    message: str
    data: List[AnalyticsPoint]
