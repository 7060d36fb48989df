# src/weatherwidget/api/health.py
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    state = request.app.state.scheduler.state
    return {"status": "ok", "loading": state.loading, "error": state.error}
