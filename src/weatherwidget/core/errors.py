# src/weatherwidget/core/errors.py
from __future__ import annotations


class WidgetError(Exception):
    """갱신 사이클에서 사용자에게 보여줄 수 있는 오류의 공통 부모."""


class ResolutionError(WidgetError):
    """geocode / reverse geocode / IP 조회 실패."""


class FetchError(WidgetError):
    """날씨 provider 호출 실패 (네트워크, HTTP, 응답 파싱)."""
