"""内置遥测接收端：日志、HTTP 与空实现。"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

import httpx

from spoontrack.telemetry.base import TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)


class NullTelemetrySink(TelemetrySink):
    """丢弃所有事件。"""

    def send(self, event: TelemetryEvent) -> None:
        return None


class LoggingTelemetrySink(TelemetrySink):
    """将事件写入日志，开发环境默认使用。"""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def send(self, event: TelemetryEvent) -> None:
        logger.log(self._level, "Event: %s %s", event.name, event.properties)


class MemoryTelemetrySink(TelemetrySink):
    """在内存中保留事件，便于测试断言。"""

    def __init__(self) -> None:
        self.events: List[TelemetryEvent] = []

    def send(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def names(self) -> List[str]:
        return [event.name for event in self.events]


class HttpTelemetrySink(TelemetrySink):
    """以 JSON POST 上报事件，在后台线程发送，不阻塞调用方。"""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="spoontrack-telemetry")

    def send(self, event: TelemetryEvent) -> None:
        future = self._executor.submit(self._post, event)
        future.add_done_callback(self._log_failure)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._client.close()

    def _post(self, event: TelemetryEvent) -> None:
        response = self._client.post(self._endpoint, json=event.to_dict())
        response.raise_for_status()

    def _log_failure(self, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.warning("遥测事件上报失败: %s", exc)
