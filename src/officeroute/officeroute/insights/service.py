"""Advisory HR insights. Never raises: core operations must not depend on it."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..core.constants import RECENT_RECORDS_FOR_INSIGHTS
from ..core.enums import AttendanceStatus
from ..users.model import User
from .provider import InsightProvider

logger = logging.getLogger(__name__)

MSG_UNAVAILABLE = "AI service unavailable. Please check API Key configuration."
MSG_FAILED = "Unable to generate insights at this time."
DEFAULT_QUERY = (
    "Provide a brief executive summary of today's attendance "
    "and any concerning trends from the recent records."
)


def build_summary(records: Sequence[AttendanceRecord], users: Sequence[User], today: date) -> dict[str, Any]:
    todays = [r for r in records if r.date == today]
    return {
        "totalEmployees": len(users),
        "todayStats": {
            "present": len(todays),
            "absent": len(users) - len(todays),
            "late": sum(1 for r in todays if r.status == AttendanceStatus.LATE),
        },
        "recentRecords": [
            {
                "name": r.employee_name,
                "date": r.date.isoformat(),
                "hours": f"{r.total_duration_minutes / 60:.1f}" if r.total_duration_minutes else "Active",
                "status": r.status.value,
            }
            for r in list(records)[-RECENT_RECORDS_FOR_INSIGHTS:]
        ],
    }


def build_prompt(summary: dict[str, Any], query: Optional[str]) -> str:
    return (
        'You are an HR Analytics AI for "OfficeRoute".\n'
        f"Here is the current attendance summary JSON: {json.dumps(summary)}.\n\n"
        f'User Query: "{query or DEFAULT_QUERY}"\n\n'
        "Keep the response concise, professional, and actionable.\n"
        "If looking for trends, look for repeated lateness or long working hours.\n"
        "Format with markdown."
    )


class InsightService:
    def __init__(self, provider: Optional[InsightProvider]):
        self._provider = provider

    def analyze(
        self,
        records: Sequence[AttendanceRecord],
        users: Sequence[User],
        query: Optional[str] = None,
        *,
        today: Optional[date] = None,
    ) -> str:
        if self._provider is None:
            return MSG_UNAVAILABLE

        summary = build_summary(records, users, today or now_local().date())
        try:
            return self._provider.generate(build_prompt(summary, query))
        except Exception:
            logger.exception("insight generation failed")
            return MSG_FAILED
