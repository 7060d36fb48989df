"""
갱신 스케줄러
-------------

위치 확인 → 예보 조회 → 상태 반영 → 다음 타이머 예약 을 한 사이클로 돌립니다.

상태 흐름:
    Idle/Armed → Resolving → Fetching → (Success | Failed) → Idle 또는 Armed

-   한 번에 한 사이클만 유효. 새 사이클은 예약된 타이머를 먼저 취소하고,
    세대 번호(generation)가 바뀐 이전 사이클의 결과는 버린다.
-   실패 시 이전 weather는 그대로 두고 error만 갱신 (stale-but-visible).
-   close() 이후 도착하는 응답은 상태에 반영하지 않는다.
"""
from __future__ import annotations
import asyncio
import traceback
from typing import Any, Callable, List, Optional

from weatherwidget.core.errors import WidgetError
from weatherwidget.core.settings import MIN_UPDATE_INTERVAL, WIDGET_TZ
from weatherwidget.location.resolver import LocationResolver
from weatherwidget.models.schemas import DisplayModel, RefreshState, WidgetOptions
from weatherwidget.utils.forecast import build_display_model
from weatherwidget.weather.fetcher import WeatherFetcher

Listener = Callable[[RefreshState], None]

# 바뀌면 다시 불러와야 하는 설정 (표시 옵션은 제외)
HYDRATE_FIELDS = {
    "provider", "api_key", "address", "latitude", "longitude",
    "language", "units", "update_interval",
}


class RefreshScheduler:
    def __init__(
        self,
        options: Optional[WidgetOptions] = None,
        *,
        resolver: Optional[LocationResolver] = None,
        fetcher: Optional[WeatherFetcher] = None,
        tz: str = WIDGET_TZ,
    ) -> None:
        self.options = options or WidgetOptions()
        self.resolver = resolver or LocationResolver()
        self.fetcher = fetcher or WeatherFetcher()
        self.tz = tz
        self.state = RefreshState()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._arm_count = 0
        self._pending: Optional[asyncio.Task] = None
        self._generation = 0
        self._closed = False
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------
    # 관찰자
    # ------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception as e:
                # 관찰자 오류가 사이클(loading 해제, 재예약)을 끊지 않게
                print(f"⚠️ 상태 구독자 오류: {e}")
                traceback.print_exc()

    # ------------------------------------------------------------
    # 공개 진입점
    # ------------------------------------------------------------
    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def armed(self) -> bool:
        return self._timer is not None

    @property
    def arm_count(self) -> int:
        """지금까지 예약된 타이머 수."""
        return self._arm_count

    async def start(self) -> None:
        await self.hydrate()

    async def refresh(self) -> RefreshState:
        await self.hydrate(True)
        return self.state

    async def configure(self, **changes: Any) -> None:
        """설정 변경. 데이터에 영향 주는 필드가 바뀌었으면 바로 다시 불러온다."""
        merged = {**self.options.model_dump(), **changes}
        new_options = WidgetOptions.model_validate(merged)
        changed = {k for k in changes if getattr(self.options, k) != getattr(new_options, k)}
        self.options = new_options
        if changed & HYDRATE_FIELDS:
            print(f"⚙️ 설정 변경 → 다시 불러오기: {sorted(changed & HYDRATE_FIELDS)}")
            await self.hydrate()

    def display_model(self, now: Optional[float] = None) -> Optional[DisplayModel]:
        if self.state.weather is None:
            return None
        return build_display_model(
            self.state.weather, language=self.options.language, tz=self.tz, now=now
        )

    def close(self) -> None:
        self._closed = True
        self._cancel_timer()
        print("🛑 스케줄러 종료")

    async def aclose(self) -> None:
        """close() 후 타이머로 시작된 사이클이 남아 있으면 끝날 때까지 기다린다."""
        self.close()
        pending = self._pending
        if pending is not None and not pending.done():
            await pending

    # ------------------------------------------------------------
    # 사이클
    # ------------------------------------------------------------
    async def hydrate(self, show_loading: bool = True) -> None:
        if self._closed:
            return
        self._cancel_timer()
        self._generation += 1
        generation = self._generation
        if show_loading:
            self._set_state(loading=True)

        try:
            opts = self.options
            location = await self.resolver.resolve(opts.query())
            if not self._is_current(generation):
                return
            self._set_state(location=location)

            weather = await self.fetcher.fetch(
                api_key=opts.api_key,
                lat=location.lat,
                lng=location.lng,
                units=opts.units,
                language=opts.language,
                provider=opts.provider,
            )
            if not self._is_current(generation):
                return
            self._set_state(weather=weather, error=None)
            print(f"✅ 날씨 갱신 완료: {location.name}")

        except WidgetError as e:
            if not self._is_current(generation):
                return
            print(f"⛔️ 날씨 갱신 실패: {e}")
            traceback.print_exc()
            self._set_state(error=str(e))

        finally:
            if self._is_current(generation):
                self._set_state(loading=False)
                self._arm()

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _interval_seconds(self) -> Optional[float]:
        ms = self.options.update_interval
        if not ms or ms < MIN_UPDATE_INTERVAL:
            return None
        return ms / 1000

    def _arm(self) -> None:
        self._cancel_timer()
        delay = self._interval_seconds()
        if delay is None or self._closed:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self._on_timer)
        self._arm_count += 1

    def _on_timer(self) -> None:
        self._timer = None
        # 조용한 갱신: loading 표시 없이
        self._pending = asyncio.ensure_future(self.hydrate(False))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
