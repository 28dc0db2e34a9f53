"""FastAPI 应用及静态 UI。"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from spoontrack.config import AppConfig
from spoontrack.core.ledger import ActivityValidationError
from spoontrack.service import SessionHeartbeat, SpoonTracker
from spoontrack.ui.view import (
    CompletionResult,
    LedgerView,
    NewActivityRequest,
    ResetRequest,
    build_view,
)

logger = logging.getLogger(__name__)


def create_app(
    tracker: Optional[SpoonTracker] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    """构建 FastAPI 应用并注册页面与接口路由。

    所有处理函数均为 ``async def``，账本修改因此都在事件循环中串行执行。
    """

    _config = config or (tracker.config if tracker is not None else AppConfig.load_default())
    _tracker = tracker or SpoonTracker.from_config(_config)
    capacity = _tracker.ledger.initial_spoons

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        heartbeat = SessionHeartbeat(_tracker, interval_seconds=_config.heartbeat_interval_seconds)
        _tracker.start_session()
        heartbeat.start()
        try:
            yield
        finally:
            await heartbeat.stop()
            _tracker.close()

    app = FastAPI(title="Spoon Tracker", lifespan=lifespan)
    app.state.tracker = _tracker

    def _view() -> LedgerView:
        return build_view(_tracker.snapshot(), capacity=capacity)

    @app.exception_handler(ActivityValidationError)
    async def validation_error(request: Request, exc: ActivityValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "field": exc.field})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("请求 %s 处理失败", request.url.path, exc_info=exc)
        _tracker.telemetry.track_exception(exc, {"path": request.url.path})
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    static_dir = _resolve_static_directory()
    if static_dir is not None:
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
        index_file = static_dir / "index.html"

        @app.get("/", tags=["ui"], include_in_schema=False)
        async def index() -> FileResponse:
            return FileResponse(index_file, media_type="text/html")

    @app.get("/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> dict[str, str]:
        return {}

    @app.get("/api/state", tags=["ledger"], response_model=LedgerView)
    async def state() -> LedgerView:
        return _view()

    @app.post("/api/spoons/add", tags=["ledger"], response_model=LedgerView)
    async def add_spoon() -> LedgerView:
        _tracker.add_spoon()
        return _view()

    @app.post("/api/spoons/remove", tags=["ledger"], response_model=LedgerView)
    async def remove_spoon() -> LedgerView:
        _tracker.remove_spoon()
        return _view()

    @app.post("/api/day/reset", tags=["ledger"], response_model=LedgerView)
    async def reset_day(body: ResetRequest) -> LedgerView:
        if not _tracker.reset_day(body.confirmed):
            raise HTTPException(status_code=400, detail="Reset must be confirmed")
        return _view()

    @app.post("/api/activities", tags=["activities"], response_model=LedgerView)
    async def add_activity(body: NewActivityRequest) -> LedgerView:
        _tracker.add_activity(body.name, body.cost)
        return _view()

    @app.post(
        "/api/activities/{activity_id}/complete",
        tags=["activities"],
        response_model=CompletionResult,
    )
    async def complete_activity(activity_id: int) -> CompletionResult:
        completed = _tracker.complete_activity(activity_id)
        return CompletionResult(completed=completed, state=_view())

    @app.delete("/api/activities/{activity_id}", tags=["activities"], response_model=LedgerView)
    async def remove_activity(activity_id: int) -> LedgerView:
        _tracker.remove_activity(activity_id)
        return _view()

    return app


def _resolve_static_directory() -> Optional[Path]:
    """在开发与打包环境下查找静态资源目录。"""

    candidates: list[Path] = [Path(__file__).resolve().parent / "static"]

    resource_path = os.environ.get("RESOURCEPATH")
    if resource_path:
        candidates.append(Path(resource_path) / "static")
        candidates.append(Path(resource_path) / "spoontrack" / "ui" / "static")

    for path in candidates:
        if (path / "index.html").exists():
            return path

    return None
