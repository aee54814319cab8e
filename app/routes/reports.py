from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from datetime import date
from typing import Optional
from app.dependencies.auth import user_supabase_client
from app.schemas.report import (
    AnalyticsPoint,
    AnalyticsResponse,
    ReportCreate,
    ReportFilters,
    ReportListResponse,
)
from app.services import chart
from app.services.report_service import create_report, get_analytics, list_reports

router = APIRouter()

RETRIEVED = "data successfully retrieved"


# -------- List reports --------
@router.get("", response_model=ReportListResponse)
def get_reports(
    date: Optional[date] = Query(None, description="Only reports on or before this day"),
    classroom: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    context=Depends(user_supabase_client)
):
    supabase = context["supabase"]
    actor = context["actor"]

    result = list_reports(supabase, actor, ReportFilters(classroom=classroom, date=date), page)
    return {
        "message": RETRIEVED,
        "data": result.items,
        "pagination": result.pagination,
    }


# -------- Rolling six month analytics --------
@router.get("/analytics", response_model=AnalyticsResponse)
def get_reports_analytics(context=Depends(user_supabase_client)):
    supabase = context["supabase"]

    months = get_analytics(supabase)
    return {
        "message": RETRIEVED,
        "data": [AnalyticsPoint(month=m.month_name, student=m.count) for m in months],
    }


@router.get("/analytics/chart")
def get_reports_analytics_chart(
    class_name: str = Query("default", description="matplotlib style sheet"),
    sample: bool = Query(False, description="Render the built-in sample series"),
    context=Depends(user_supabase_client)
):
    supabase = context["supabase"]
    chart.validate_style(class_name)

    items = None
    if not sample:
        items = [{"month": m.month_name, chart.SERIES_KEY: m.count} for m in get_analytics(supabase)]

    bar_chart = chart.build_chart(items, class_name=class_name)
    return StreamingResponse(chart.render_png(bar_chart), media_type="image/png")


# -------- Create report --------
@router.post("")
def store_report(report: ReportCreate, context=Depends(user_supabase_client)):
    supabase = context["supabase"]
    actor = context["actor"]

    return create_report(supabase, actor, report.student_id, report.description)
