"""Timezone-safe datetime helpers."""

from __future__ import annotations

from datetime import datetime

import pytz


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)


def elapsed_ms(started_at: datetime | None, finished_at: datetime | None = None) -> int | None:
    if started_at is None:
        return None
    if started_at.tzinfo is None:
        started_at = pytz.UTC.localize(started_at)
    finished_at = finished_at or now_utc()
    if finished_at.tzinfo is None:
        finished_at = pytz.UTC.localize(finished_at)
    return max(int((finished_at - started_at).total_seconds() * 1000), 0)
