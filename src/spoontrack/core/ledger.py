"""勺子能量账本：计数、活动队列与派生统计。"""

from __future__ import annotations

import datetime as dt
import itertools
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from spoontrack.config import DEFAULT_EXAMPLE_ACTIVITIES, AppConfig, ExampleActivity


CRITICAL_THRESHOLD = 2

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


class EnergyLevel(Enum):
    """剩余勺子数对应的能量等级。"""

    EXCELLENT = ("Excellent", "#4ecdc4")
    GOOD = ("Good", "#ffa726")
    LOW = ("Low", "#ff6b6b")
    CRITICAL = ("Critical", "#d32f2f")

    def __init__(self, label: str, color: str) -> None:
        self.label = label
        self.color = color

    @classmethod
    def classify(cls, spoons: int) -> "EnergyLevel":
        # 阈值为闭区间下界，从高到低判断
        if spoons >= 10:
            return cls.EXCELLENT
        if spoons >= 6:
            return cls.GOOD
        if spoons >= 3:
            return cls.LOW
        return cls.CRITICAL


class ActivityValidationError(ValueError):
    """活动名称或消耗不合法。"""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class Activity:
    """待完成的活动，创建后不可变。"""

    id: int
    name: str
    cost: int
    created_at: dt.datetime


@dataclass(frozen=True)
class LedgerSnapshot:
    """账本的只读快照。"""

    spoons: int
    total_spent: int
    completed_activities: int
    activities: Tuple[Activity, ...]
    energy_level: EnergyLevel
    session_start: dt.datetime
    session_duration_minutes: int


def parse_cost(raw: Union[int, str, None], default: int = 1) -> int:
    """将输入的消耗解析为整数。

    文本取开头的整数部分；无法解析、为空或为 0 时回退为 ``default``。
    负数原样返回，由后续范围校验拒绝。
    """

    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw or default
    if isinstance(raw, float):
        return int(raw) or default
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return default
    return int(match.group(1)) or default


class ResourceLedger:
    """单个会话内的勺子账本。"""

    def __init__(
        self,
        initial_spoons: int = 12,
        example_activities: Optional[Iterable[ExampleActivity]] = None,
        min_cost: int = 1,
        max_cost: int = 10,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self._initial_spoons = initial_spoons
        self._examples: List[ExampleActivity] = list(
            DEFAULT_EXAMPLE_ACTIVITIES if example_activities is None else example_activities
        )
        self._min_cost = min_cost
        self._max_cost = max_cost
        self._clock = clock or dt.datetime.now
        self._ids = itertools.count(1)

        self.spoons = initial_spoons
        self.total_spent = 0
        self.completed_activities = 0
        self._activities: List[Activity] = []
        self.session_start = self._now()
        self._load_examples()

    @classmethod
    def from_config(
        cls, config: AppConfig, clock: Optional[Callable[[], dt.datetime]] = None
    ) -> "ResourceLedger":
        return cls(
            initial_spoons=config.initial_spoons,
            example_activities=config.example_activities,
            min_cost=config.min_activity_cost,
            max_cost=config.max_activity_cost,
            clock=clock,
        )

    @property
    def activities(self) -> Sequence[Activity]:
        return tuple(self._activities)

    @property
    def initial_spoons(self) -> int:
        return self._initial_spoons

    def add_spoon(self) -> None:
        self.spoons += 1

    def remove_spoon(self) -> bool:
        """消耗一把勺子；已为 0 时静默忽略并返回 False。"""

        if self.spoons <= 0:
            return False
        self.spoons -= 1
        self.total_spent += 1
        return True

    def add_activity(self, name: str, cost: Union[int, str, None]) -> Activity:
        """校验并追加新活动，失败时抛出 ActivityValidationError 且不修改状态。"""

        clean_name = (name or "").strip()
        parsed_cost = parse_cost(cost)

        if not clean_name:
            raise ActivityValidationError("name", "Please enter an activity name")
        if not self._min_cost <= parsed_cost <= self._max_cost:
            raise ActivityValidationError(
                "cost",
                f"Cost must be between {self._min_cost} and {self._max_cost} spoons",
            )

        activity = Activity(
            id=next(self._ids),
            name=clean_name,
            cost=parsed_cost,
            created_at=self._now(),
        )
        self._activities.append(activity)
        return activity

    def find_activity(self, activity_id: int) -> Optional[Activity]:
        for activity in self._activities:
            if activity.id == activity_id:
                return activity
        return None

    def can_afford(self, activity: Activity) -> bool:
        return self.spoons >= activity.cost

    def complete_activity(self, activity_id: int) -> bool:
        """完成活动并扣除勺子；找不到或勺子不足时不做任何修改。"""

        activity = self.find_activity(activity_id)
        if activity is None or not self.can_afford(activity):
            return False

        self.spoons -= activity.cost
        self.total_spent += activity.cost
        self.completed_activities += 1
        self._activities = [a for a in self._activities if a.id != activity_id]
        return True

    def remove_activity(self, activity_id: int) -> Optional[Activity]:
        activity = self.find_activity(activity_id)
        if activity is not None:
            self._activities = [a for a in self._activities if a.id != activity_id]
        return activity

    def reset_day(self) -> None:
        """恢复初始状态。是否需要用户确认由调用方决定。"""

        self.spoons = self._initial_spoons
        self.total_spent = 0
        self.completed_activities = 0
        self.session_start = self._now()
        self._load_examples()

    def energy_level(self) -> EnergyLevel:
        return EnergyLevel.classify(self.spoons)

    def is_critical(self) -> bool:
        return self.spoons <= CRITICAL_THRESHOLD

    def session_duration_minutes(self) -> int:
        elapsed = (self._now() - self.session_start).total_seconds()
        # 半分钟向上取整
        return max(0, int(elapsed / 60 + 0.5))

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            spoons=self.spoons,
            total_spent=self.total_spent,
            completed_activities=self.completed_activities,
            activities=tuple(self._activities),
            energy_level=self.energy_level(),
            session_start=self.session_start,
            session_duration_minutes=self.session_duration_minutes(),
        )

    def _load_examples(self) -> None:
        created_at = self._now()
        self._activities = [
            Activity(id=next(self._ids), name=item.name, cost=item.cost, created_at=created_at)
            for item in self._examples
        ]

    def _now(self) -> dt.datetime:
        return self._clock()
