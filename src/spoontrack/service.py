"""账本与遥测的组合，以及会话心跳。"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Optional, Union

from spoontrack.config import AppConfig
from spoontrack.core.ledger import Activity, LedgerSnapshot, ResourceLedger
from spoontrack.telemetry import TelemetryClient

logger = logging.getLogger(__name__)


class SpoonTracker:
    """处理用户动作：先修改账本，再记录日志并上报遥测。"""

    def __init__(
        self,
        ledger: Optional[ResourceLedger] = None,
        telemetry: Optional[TelemetryClient] = None,
        config: Optional[AppConfig] = None,
    ) -> None:
        self._config = config or AppConfig.load_default()
        self.ledger = ledger or ResourceLedger.from_config(self._config)
        self.telemetry = telemetry or TelemetryClient()
        self.telemetry.bind_session(self.ledger.session_duration_minutes)

    @classmethod
    def from_config(cls, config: AppConfig) -> "SpoonTracker":
        return cls(
            ledger=ResourceLedger.from_config(config),
            telemetry=TelemetryClient.from_config(config),
            config=config,
        )

    @property
    def config(self) -> AppConfig:
        return self._config

    def snapshot(self) -> LedgerSnapshot:
        return self.ledger.snapshot()

    def start_session(self) -> None:
        logger.info(
            "会话开始: 勺子=%s, 环境=%s, 构建=%s",
            self.ledger.spoons,
            self._config.environment,
            self._config.build_id or "-",
        )
        self.telemetry.track(
            "SessionStarted",
            {
                "initial_spoons": self.ledger.spoons,
                "environment": self._config.environment,
                "build_id": self._config.build_id,
            },
        )

    def add_spoon(self) -> None:
        self.ledger.add_spoon()
        self.telemetry.track("SpoonAdded", {"new_count": self.ledger.spoons})

    def remove_spoon(self) -> bool:
        removed = self.ledger.remove_spoon()
        if removed:
            self.telemetry.track(
                "SpoonRemoved",
                {"new_count": self.ledger.spoons, "total_spent": self.ledger.total_spent},
            )
        return removed

    def add_activity(self, name: str, cost: Union[int, str, None]) -> Activity:
        activity = self.ledger.add_activity(name, cost)
        logger.info("新增活动 %s (消耗 %s)", activity.name, activity.cost)
        self.telemetry.track(
            "ActivityAdded",
            {
                "activity_name": activity.name,
                "cost": activity.cost,
                "total_activities": len(self.ledger.activities),
            },
        )
        return activity

    def complete_activity(self, activity_id: int) -> bool:
        activity = self.ledger.find_activity(activity_id)
        if not self.ledger.complete_activity(activity_id):
            return False

        assert activity is not None
        logger.info("完成活动 %s，剩余勺子 %s", activity.name, self.ledger.spoons)
        self.telemetry.track(
            "ActivityCompleted",
            {
                "activity_name": activity.name,
                "cost": activity.cost,
                "remaining_spoons": self.ledger.spoons,
                "total_completed": self.ledger.completed_activities,
            },
        )
        if self.ledger.is_critical():
            logger.warning("能量已处于危险水平 (%s)，建议休息", self.ledger.spoons)
        return True

    def remove_activity(self, activity_id: int) -> Optional[Activity]:
        activity = self.ledger.remove_activity(activity_id)
        if activity is not None:
            self.telemetry.track(
                "ActivityRemoved",
                {"activity_name": activity.name, "cost": activity.cost},
            )
        return activity

    def reset_day(self, confirmed: bool) -> bool:
        """开始新的一天。未经确认时不做任何修改。"""

        if not confirmed:
            return False

        previous = {
            "spoons": self.ledger.spoons,
            "total_spent": self.ledger.total_spent,
            "completed_activities": self.ledger.completed_activities,
            "session_duration": self.ledger.session_duration_minutes(),
        }
        self.ledger.reset_day()
        logger.info("已重置为新的一天: %s", previous)
        self.telemetry.track("DayReset", previous)
        return True

    def heartbeat(self) -> None:
        """上报一次会话心跳，只读取状态。"""

        snapshot = self.ledger.snapshot()
        self.telemetry.track(
            "SessionHeartbeat",
            {
                "current_spoons": snapshot.spoons,
                "total_spent": snapshot.total_spent,
                "activities_count": len(snapshot.activities),
            },
        )

    def close(self) -> None:
        self.telemetry.close()


class SessionHeartbeat:
    """在事件循环中周期性触发会话心跳。"""

    def __init__(self, tracker: SpoonTracker, interval_seconds: float = 300.0) -> None:
        self._tracker = tracker
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="spoontrack-heartbeat")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._tracker.heartbeat()
