"""应用配置模型。"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ExampleActivity(BaseModel):
    """每日重置时预置的示例活动。"""

    name: str = Field(..., min_length=1)
    cost: int = Field(1, ge=1, le=10)


DEFAULT_EXAMPLE_ACTIVITIES = [
    ExampleActivity(name="Take a shower", cost=2),
    ExampleActivity(name="Go grocery shopping", cost=4),
    ExampleActivity(name="Cook a meal", cost=3),
    ExampleActivity(name="Answer emails", cost=2),
]


class HealthCheckConfig(BaseModel):
    """部署后健康巡检配置。"""

    base_url: str = "http://localhost:8080"
    timeout_seconds: float = Field(10.0, gt=0.0)
    report_path: str = "health-check-results.xml"
    content_checks: dict[str, str] = Field(
        default_factory=lambda: {
            "Title": r"Spoon Tracker",
            "Spoon Counter": r"spoon-counter",
            "Main Content": r"main-content",
            "Stats Section": r"stats",
        }
    )
    resource_checks: dict[str, str] = Field(
        default_factory=lambda: {
            "CSS": r"styles/main\.css",
            "JavaScript": r"scripts/app\.js",
        }
    )
    element_ids: list[str] = Field(
        default_factory=lambda: [
            "spoonCount",
            "spoonVisual",
            "totalSpent",
            "activitiesDone",
            "energyLevel",
        ]
    )
    element_ratio: float = Field(0.8, ge=0.0, le=1.0)


class AppConfig(BaseModel):
    """总配置。"""

    initial_spoons: int = Field(12, ge=0)
    min_activity_cost: int = Field(1, ge=1)
    max_activity_cost: int = Field(10, ge=1)
    example_activities: list[ExampleActivity] = Field(
        default_factory=lambda: [item.model_copy() for item in DEFAULT_EXAMPLE_ACTIVITIES]
    )
    heartbeat_interval_seconds: float = Field(300.0, ge=1.0)
    telemetry_enabled: bool = True
    telemetry_endpoint: Optional[str] = None
    telemetry_timeout_seconds: float = Field(5.0, gt=0.0)
    environment: str = "development"
    build_id: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    health_check: HealthCheckConfig = Field(default_factory=HealthCheckConfig)

    @model_validator(mode="after")
    def check_cost_range(self) -> "AppConfig":
        if self.min_activity_cost > self.max_activity_cost:
            raise ValueError("min_activity_cost 不能大于 max_activity_cost")
        for item in self.example_activities:
            if not self.min_activity_cost <= item.cost <= self.max_activity_cost:
                raise ValueError(f"示例活动 {item.name!r} 的消耗 {item.cost} 超出允许范围")
        return self

    @classmethod
    def load_default(cls) -> "AppConfig":
        return cls()

    @classmethod
    def load(cls) -> "AppConfig":
        """优先尝试加载项目根目录的 `config.local.py`，否则返回默认配置。"""

        root_dir = Path(__file__).resolve().parents[2]
        local_path = root_dir / "config.local.py"
        if not local_path.exists():
            return cls.load_default()

        spec = importlib.util.spec_from_file_location("config_local", local_path)
        if spec is None or spec.loader is None:
            return cls.load_default()

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)  # type: ignore[arg-type]
        except Exception:
            return cls.load_default()

        load_fn = getattr(module, "load_config", None)
        if callable(load_fn):
            try:
                return load_fn()
            except Exception:
                return cls.load_default()
        return cls.load_default()
