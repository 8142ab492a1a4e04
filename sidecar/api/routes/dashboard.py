"""
Dashboard API routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from timejoy.core.aggregation import build_dashboard
from timejoy.core.catalog import hex_color
from timejoy.core.models import User
from timejoy.core.store import StateStore
from timejoy.utils import parse_date, today_iso

from ..dependencies import current_user, get_store
from .. import view_cache
from .entries import EntryResponse

router = APIRouter()
logger = logging.getLogger(__name__)


class BreakdownRowResponse(BaseModel):
    activityLabel: str
    hours: float
    colorToken: str
    hexColor: str


class ComparisonRowResponse(BaseModel):
    activityLabel: str
    currentHours: float
    previousHours: float


class MoodSliceResponse(BaseModel):
    moodLabel: str
    totalMinutes: int
    colorToken: str
    hexColor: str


class SummaryResponse(BaseModel):
    totalHours: float
    happyHours: float
    activeUserCount: int


class DashboardResponse(BaseModel):
    """Chart data for the current profile.

    In privacy mode (administrators) the numbers cover every profile and
    ``recentActivity`` is always null.
    """

    privacyMode: bool
    today: str
    todayBreakdown: list[BreakdownRowResponse]
    weeklyComparison: list[ComparisonRowResponse]
    moodDistribution: list[MoodSliceResponse]
    summary: SummaryResponse
    recentActivity: list[EntryResponse] | None = None


@router.get("")
def get_dashboard(
    today: str | None = Query(None, description="YYYY-MM-DD, defaults to the local date"),
    user: User = Depends(current_user),
    store: StateStore = Depends(get_store),
) -> DashboardResponse:
    parsed = parse_date(today or today_iso())
    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Invalid date: {today}")
    day = parsed.isoformat()
    cached = view_cache.get_view(user.id, day)
    if cached is not None:
        return cached

    built_at = view_cache.generation()
    state = store.load()
    view = build_dashboard(user, state.entries, state.work_types, state.mood_options, day)
    response = DashboardResponse(
        privacyMode=view.privacy_mode,
        today=day,
        todayBreakdown=[
            BreakdownRowResponse(
                activityLabel=row.activity_label,
                hours=row.hours,
                colorToken=row.color,
                hexColor=hex_color(row.color),
            )
            for row in view.today_breakdown
        ],
        weeklyComparison=[
            ComparisonRowResponse(
                activityLabel=row.activity_label,
                currentHours=row.current_hours,
                previousHours=row.previous_hours,
            )
            for row in view.weekly_comparison
        ],
        moodDistribution=[
            MoodSliceResponse(
                moodLabel=row.mood_label,
                totalMinutes=row.total_minutes,
                colorToken=row.color,
                hexColor=hex_color(row.color),
            )
            for row in view.mood_distribution
        ],
        summary=SummaryResponse(
            totalHours=view.summary.total_hours,
            happyHours=view.summary.happy_hours,
            activeUserCount=view.summary.active_user_count,
        ),
        recentActivity=(
            [EntryResponse.from_entry(e) for e in view.recent_activity]
            if view.recent_activity is not None
            else None
        ),
    )
    view_cache.put_view(user.id, day, response, built_at)
    return response
