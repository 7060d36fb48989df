# src/weatherwidget/api/widget.py
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from typing import Any, Dict

from weatherwidget.models.schemas import WidgetOptionsUpdate
from weatherwidget.pipelines.scheduler import RefreshScheduler

router = APIRouter()


def get_scheduler(request: Request) -> RefreshScheduler:
    return request.app.state.scheduler


def _state_payload(scheduler: RefreshScheduler) -> Dict[str, Any]:
    return scheduler.state.model_dump(by_alias=True, mode="json")


@router.get("/widget")
async def read_widget(scheduler: RefreshScheduler = Depends(get_scheduler)):
    """
    화면 레이어가 읽어가는 전체 데이터
    - state: loading / error / weather / location
    - display: 파생 모델 (weather 없으면 null)
    - rendering: 표시 옵션 (그대로 전달)
    """
    display = scheduler.display_model()
    return {
        "state": _state_payload(scheduler),
        "display": display.model_dump(by_alias=True, mode="json") if display else None,
        "rendering": scheduler.options.rendering().model_dump(by_alias=True),
    }


@router.post("/widget/refresh")
async def refresh_widget(scheduler: RefreshScheduler = Depends(get_scheduler)):
    print("📡 [Widget] 수동 갱신 요청")
    await scheduler.refresh()
    return _state_payload(scheduler)


@router.patch("/widget/options")
async def update_options(body: WidgetOptionsUpdate, scheduler: RefreshScheduler = Depends(get_scheduler)):
    changes = body.model_dump(exclude_unset=True)
    print(f"⚙️ [Widget] 설정 변경 요청: {sorted(changes)}")
    try:
        await scheduler.configure(**changes)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    return _state_payload(scheduler)
