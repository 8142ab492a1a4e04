"""Weekly report e-mail (simulated delivery)."""

from __future__ import annotations

import logging
from html import escape

from .aggregation import DashboardView
from .models import User

logger = logging.getLogger(__name__)

EMAIL_HOST = "smtp.timejoy.local"
DEFAULT_FROM_EMAIL = "TimeJoy <reports@timejoy.local>"


def render_weekly_report(user: User, view: DashboardView) -> str:
    """HTML body for a user's weekly report."""
    rows = "".join(
        f"<li>{escape(row.activity_label)}: {row.current_hours:.1f} h</li>"
        for row in view.weekly_comparison
    )
    return (
        f"<h1>Weekly Report for {escape(user.username)}</h1>"
        f"<p>Total logged: {view.summary.total_hours:.1f} h, "
        f"happy time: {view.summary.happy_hours:.1f} h.</p>"
        f"<ul>{rows}</ul>"
    )


def send_weekly_report(recipient: str, body: str) -> bool:
    """Pretend to deliver ``body`` to ``recipient``; only logs the attempt."""
    recipient = recipient.strip()
    if not recipient:
        logger.warning("Weekly report not sent: no recipient address")
        return False
    logger.info(
        "[SIMULATION] Sending weekly report via %s from %s to %s (%d chars)",
        EMAIL_HOST,
        DEFAULT_FROM_EMAIL,
        recipient,
        len(body),
    )
    return True
