# src/weatherwidget/core/settings.py
from __future__ import annotations
import os

# "오늘" 판정과 요일 라벨에 쓰는 타임존
WIDGET_TZ = os.getenv("WIDGET_TZ", "UTC")

HTTP_TIMEOUT = float(os.getenv("WIDGET_HTTP_TIMEOUT", "7.0"))

# 이 값 미만의 갱신 주기는 무시 (자동 갱신 꺼짐)
MIN_UPDATE_INTERVAL = 10
