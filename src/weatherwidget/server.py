# src/weatherwidget/server.py
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

import config
from weatherwidget.api import health, widget
from weatherwidget.models.schemas import WidgetOptions
from weatherwidget.pipelines.scheduler import RefreshScheduler


def options_from_env() -> WidgetOptions:
    """config.py(.env) 값으로 WidgetOptions 구성"""
    return WidgetOptions(
        provider=config.WEATHER_PROVIDER,
        api_key=config.WEATHER_API_KEY,
        address=config.WIDGET_ADDRESS,
        latitude=config.WIDGET_LATITUDE,
        longitude=config.WIDGET_LONGITUDE,
        language=config.WIDGET_LANGUAGE,
        units=config.WIDGET_UNITS,
        update_interval=config.WIDGET_UPDATE_INTERVAL,
        hide_header=config.WIDGET_HIDE_HEADER,
        disable_animation=config.WIDGET_DISABLE_ANIMATION,
        bar_color=config.WIDGET_BAR_COLOR,
        text_color=config.WIDGET_TEXT_COLOR,
    )


def create_app(scheduler: Optional[RefreshScheduler] = None) -> FastAPI:
    scheduler = scheduler or RefreshScheduler(options_from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ✅ 첫 사이클은 백그라운드로 (네트워크 대기 때문에 기동이 막히지 않게)
        first = asyncio.create_task(scheduler.start())
        try:
            yield
        finally:
            await scheduler.aclose()
            if not first.done():
                await first

    app = FastAPI(title="Weather Widget API", lifespan=lifespan)
    app.state.scheduler = scheduler

    # ============================================================
    # 📦 라우터 등록
    # ============================================================
    app.include_router(widget.router, prefix="/api")
    app.include_router(health.router)

    return app
