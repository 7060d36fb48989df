# src/weatherwidget/utils/timewindow.py
from __future__ import annotations
import time
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

DAY_SECONDS = 24 * 3600


def now_ts() -> float:
    """현재 시각 (epoch 초)."""
    return time.time()


def end_of_today_ts(*, tz: str, now: Optional[float] = None) -> int:
    """
    로컬 TZ 기준 오늘 자정 + 86400 - 1 (epoch 초).
    이 값 이하의 time을 가진 일별 예보는 "Today"로 표시.
    """
    tzinfo = ZoneInfo(tz)
    now_local = datetime.fromtimestamp(now_ts() if now is None else now, tzinfo)
    midnight = now_local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp()) + DAY_SECONDS - 1


def local_datetime(ts: float, *, tz: str) -> datetime:
    return datetime.fromtimestamp(ts, ZoneInfo(tz))
