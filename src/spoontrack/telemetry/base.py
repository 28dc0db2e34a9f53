"""遥测接收端抽象基类。"""

from __future__ import annotations

import abc
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class TelemetryEvent:
    """单条命名事件。"""

    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    timestamp: dt.datetime = field(default_factory=dt.datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "properties": dict(self.properties),
            "timestamp": self.timestamp.isoformat(),
        }


class TelemetrySink(abc.ABC):
    """遥测接口，便于替换为不同的上报实现。"""

    @abc.abstractmethod
    def send(self, event: TelemetryEvent) -> None:
        """发送事件。"""

        raise NotImplementedError

    def close(self) -> None:
        """释放底层资源，默认无操作。"""
