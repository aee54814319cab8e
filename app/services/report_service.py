import logging
import math
from datetime import date
from typing import Dict, List, Optional

from postgrest.exceptions import APIError

from app.config import REPORTS_PAGE_SIZE
from app.errors import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from app.schemas.auth import Actor, Role
from app.schemas.report import MonthCount, Pagination, Report, ReportFilters, ReportPage
from app.services.scope import apply_scope, restrict_to_classroom, scope_for
from app.utils.month_window import month_bounds, month_name, rolling_months

logger = logging.getLogger(__name__)

REPORTS_TABLE = "reports"
STUDENTS_TABLE = "students"

REPORT_WITH_STUDENT = "*, student:students!inner(*, classroom:classrooms(*))"

# PostgREST answers 416 with this code when the requested range starts past the last row
RANGE_NOT_SATISFIABLE = "PGRST103"
# Postgres invalid_text_representation, e.g. "abc" compared against an integer key
INVALID_TEXT_REPRESENTATION = "22P02"


def _filtered_reports(query, actor: Actor, filters: ReportFilters):
    query = apply_scope(query, scope_for(actor))
    # ANDed with the teacher scope above, so it can only narrow the result
    if filters.classroom:
        query = restrict_to_classroom(query, filters.classroom)
    if filters.date:
        query = query.lte("date", filters.date.isoformat())
    return query


def _count_reports(supabase, actor: Actor, filters: ReportFilters) -> int:
    query = supabase \
        .table(REPORTS_TABLE) \
        .select("id, student:students!inner(classroom_id)", count="exact", head=True)
    return _filtered_reports(query, actor, filters).execute().count or 0


def _paginate(items: List[Report], total: int, page: int, page_size: int) -> Pagination:
    start = (page - 1) * page_size
    return Pagination(
        current_page=page,
        per_page=page_size,
        total=total,
        last_page=max(1, math.ceil(total / page_size)),
        from_=start + 1 if items else None,
        to=start + len(items) if items else None,
    )


def list_reports(
    supabase,
    actor: Actor,
    filters: Optional[ReportFilters] = None,
    page: int = 1,
    page_size: int = REPORTS_PAGE_SIZE,
) -> ReportPage:
    """Return one page of reports visible to ``actor``, newest first.

    Teachers are always confined to their own classroom. An explicit
    classroom filter is applied on top of that confinement rather than in
    place of it, so a teacher asking for another classroom gets an empty page.
    """
    filters = filters or ReportFilters()
    if page < 1:
        raise ValidationError({"page": ["The page must be at least 1."]})

    start = (page - 1) * page_size
    end = start + page_size - 1

    logger.info(
        f"Listing reports for actor {actor.id} ({actor.role.value}), "
        f"classroom={filters.classroom}, date={filters.date}, page={page}"
    )

    query = supabase \
        .table(REPORTS_TABLE) \
        .select(REPORT_WITH_STUDENT, count="exact")

    try:
        response = _filtered_reports(query, actor, filters) \
            .order("date", desc=True) \
            .range(start, end) \
            .execute()
    except APIError as e:
        if e.code != RANGE_NOT_SATISFIABLE:
            raise
        logger.info(f"Page {page} is past the last report, returning an empty page")
        total = _count_reports(supabase, actor, filters)
        return ReportPage(items=[], pagination=_paginate([], total, page, page_size))

    items = [Report.model_validate(row) for row in response.data or []]
    total = response.count if response.count is not None else len(items)
    return ReportPage(items=items, pagination=_paginate(items, total, page, page_size))


def _validate_report_fields(student_id: Optional[str], description: Optional[str]) -> None:
    errors: Dict[str, List[str]] = {}
    if student_id is None or not str(student_id).strip():
        errors["student_id"] = ["The student id field is required."]
    if description is None or not description.strip():
        errors["description"] = ["The description field is required."]
    if errors:
        raise ValidationError(errors)


def create_report(
    supabase,
    actor: Actor,
    student_id: Optional[str],
    description: Optional[str],
    today: Optional[date] = None,
) -> Dict[str, str]:
    _validate_report_fields(student_id, description)

    try:
        student_res = supabase \
            .table(STUDENTS_TABLE) \
            .select("*, classroom:classrooms(*)") \
            .eq("id", student_id) \
            .execute()
    except APIError as e:
        # an id the key column cannot parse can never match a student
        if e.code != INVALID_TEXT_REPRESENTATION:
            raise
        logger.warning(f"Report rejected: student id {student_id!r} is malformed")
        raise NotFoundError("student not found") from e
    if not student_res.data:
        logger.warning(f"Report rejected: student {student_id} not found")
        raise NotFoundError("student not found")

    student = student_res.data[0]
    student_classroom = student.get("classroom_id")
    same_classroom = (
        actor.classroom_id is not None
        and student_classroom is not None
        and actor.classroom_id == str(student_classroom)
    )
    if actor.role != Role.ADMIN and not same_classroom:
        logger.warning(
            f"Actor {actor.id} ({actor.role.value}) may not write reports "
            f"for student {student_id} in classroom {student_classroom}"
        )
        raise AuthorizationError("you're not permitted to do this operation")

    report_date = today or date.today()
    payload = {
        "student_id": student_id,
        "description": description,
        "date": report_date.isoformat(),
    }

    try:
        inserted = supabase.table(REPORTS_TABLE).insert(payload).execute()
    except APIError as e:
        logger.error(f"Failed to store report for student {student_id}: {e.message}")
        raise PersistenceError("report could not be saved") from e

    if not inserted.data:
        logger.error(f"Insert for student {student_id} returned no rows")
        raise PersistenceError("report could not be saved")

    logger.info(f"Report created for student {student_id} on {report_date}")
    return {"message": "report successfully created"}


def get_analytics(supabase, today: Optional[date] = None) -> List[MonthCount]:
    """Report counts for the current month and the five before it, oldest first."""
    today = today or date.today()
    result = []
    for year, month in rolling_months(today):
        start, end = month_bounds(year, month)
        response = supabase \
            .table(REPORTS_TABLE) \
            .select("id", count="exact", head=True) \
            .gte("date", start.isoformat()) \
            .lt("date", end.isoformat()) \
            .execute()
        result.append(MonthCount(
            year=year,
            month=month,
            month_name=month_name(month),
            count=response.count or 0,
        ))

    logger.info(f"Analytics computed for {len(result)} months ending {today:%Y-%m}")
    return result
