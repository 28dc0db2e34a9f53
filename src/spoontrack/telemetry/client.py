"""尽力而为的遥测客户端。"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from spoontrack.config import AppConfig
from spoontrack.telemetry.base import TelemetryEvent, TelemetrySink
from spoontrack.telemetry.sinks import HttpTelemetrySink, LoggingTelemetrySink, NullTelemetrySink

logger = logging.getLogger(__name__)


class TelemetryClient:
    """为事件补充会话时长与时间戳后交给接收端。

    上报失败只记录警告，从不向调用方抛出异常，保证账本状态不受影响。
    """

    def __init__(
        self,
        sink: Optional[TelemetrySink] = None,
        session_minutes: Optional[Callable[[], int]] = None,
    ) -> None:
        self._sink = sink or NullTelemetrySink()
        self._session_minutes = session_minutes

    @classmethod
    def from_config(cls, config: AppConfig) -> "TelemetryClient":
        if not config.telemetry_enabled:
            return cls(NullTelemetrySink())
        if config.telemetry_endpoint:
            sink: TelemetrySink = HttpTelemetrySink(
                config.telemetry_endpoint, timeout=config.telemetry_timeout_seconds
            )
        else:
            sink = LoggingTelemetrySink()
        return cls(sink)

    @property
    def sink(self) -> TelemetrySink:
        return self._sink

    def bind_session(self, session_minutes: Callable[[], int]) -> None:
        self._session_minutes = session_minutes

    def track(self, name: str, properties: Optional[Mapping[str, Any]] = None) -> None:
        try:
            payload: Dict[str, Any] = dict(properties or {})
            if self._session_minutes is not None:
                payload["session_duration_minutes"] = self._session_minutes()
            now = self._now()
            payload["timestamp"] = now.isoformat()
            self._sink.send(TelemetryEvent(name=name, properties=payload, timestamp=now))
        except Exception:
            logger.warning("遥测事件 %s 发送失败，已忽略", name, exc_info=True)

    def track_exception(self, exc: BaseException, properties: Optional[Mapping[str, Any]] = None) -> None:
        payload: Dict[str, Any] = dict(properties or {})
        payload["exception_type"] = type(exc).__name__
        payload["message"] = str(exc)
        self.track("Exception", payload)

    def close(self) -> None:
        try:
            self._sink.close()
        except Exception:
            logger.warning("关闭遥测接收端失败", exc_info=True)

    def _now(self) -> dt.datetime:
        return dt.datetime.now()
