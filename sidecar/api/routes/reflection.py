"""
Reflection and weekly report API routes
"""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from timejoy.core.aggregation import build_dashboard
from timejoy.core.models import User
from timejoy.core.notifications import render_weekly_report, send_weekly_report
from timejoy.core.reflection import reflect
from timejoy.core.state import entries_for
from timejoy.core.store import StateStore
from timejoy.utils import today_iso

from ..dependencies import get_store, member_user

router = APIRouter()
logger = logging.getLogger(__name__)


class ReflectionResponse(BaseModel):
    text: str


class EmailReportResponse(BaseModel):
    sent: bool
    recipient: str


@router.post("")
def create_reflection(
    timeout: float = Query(120, gt=0, le=600),
    user: User = Depends(member_user),
    store: StateStore = Depends(get_store),
) -> ReflectionResponse:
    """Ask the coach for a reflection on the current profile's entries."""
    state = store.load()
    text = reflect(
        entries_for(state, user.id),
        state.work_types,
        state.mood_options,
        timeout_seconds=timeout,
    )
    return ReflectionResponse(text=text)


@router.post("/email")
def email_report(
    user: User = Depends(member_user),
    store: StateStore = Depends(get_store),
) -> EmailReportResponse:
    state = store.load()
    view = build_dashboard(user, state.entries, state.work_types, state.mood_options, today_iso())
    sent = send_weekly_report(user.email, render_weekly_report(user, view))
    return EmailReportResponse(sent=sent, recipient=user.email)
