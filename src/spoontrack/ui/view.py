"""供页面渲染的视图模型。"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel

from spoontrack.core.ledger import CRITICAL_THRESHOLD, LedgerSnapshot

SPOON = "🥄"
EMPTY_SPOON = "⚫"


class ActivityView(BaseModel):
    id: int
    name: str
    cost: int
    created_at: dt.datetime
    affordable: bool


class LedgerView(BaseModel):
    spoons: int
    total_spent: int
    completed_activities: int
    energy_level: str
    energy_color: str
    spoon_visual: str
    critical: bool
    session_duration_minutes: int
    activities: List[ActivityView]


class CompletionResult(BaseModel):
    completed: bool
    state: LedgerView


class ResetRequest(BaseModel):
    confirmed: bool = False


class NewActivityRequest(BaseModel):
    name: str = ""
    cost: Optional[Union[int, str]] = "1"


def spoon_visual(spoons: int, capacity: int = 12, max_display: int = 15) -> str:
    """已有勺子最多显示 ``max_display`` 个，缺少的部分补齐到 ``capacity``。"""

    filled = SPOON * max(0, min(spoons, max_display))
    missing = EMPTY_SPOON * max(0, capacity - spoons)
    return filled + missing


def build_view(snapshot: LedgerSnapshot, capacity: int = 12) -> LedgerView:
    return LedgerView(
        spoons=snapshot.spoons,
        total_spent=snapshot.total_spent,
        completed_activities=snapshot.completed_activities,
        energy_level=snapshot.energy_level.label,
        energy_color=snapshot.energy_level.color,
        spoon_visual=spoon_visual(snapshot.spoons, capacity=capacity),
        critical=snapshot.spoons <= CRITICAL_THRESHOLD,
        session_duration_minutes=snapshot.session_duration_minutes,
        activities=[
            ActivityView(
                id=activity.id,
                name=activity.name,
                cost=activity.cost,
                created_at=activity.created_at,
                affordable=snapshot.spoons >= activity.cost,
            )
            for activity in snapshot.activities
        ],
    )
