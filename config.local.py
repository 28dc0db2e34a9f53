"""本地配置覆盖示例，存在时由 AppConfig.load() 加载。"""

from spoontrack.config import AppConfig, ExampleActivity, HealthCheckConfig


def load_config() -> AppConfig:
    return AppConfig(
        initial_spoons=12,
        example_activities=[
            ExampleActivity(name="Take a shower", cost=2),
            ExampleActivity(name="Go grocery shopping", cost=4),
            ExampleActivity(name="Cook a meal", cost=3),
            ExampleActivity(name="Answer emails", cost=2),
        ],
        heartbeat_interval_seconds=300.0,
        telemetry_enabled=True,
        # telemetry_endpoint="https://telemetry.example.com/events",
        environment="development",
        host="127.0.0.1",
        port=8000,
        health_check=HealthCheckConfig(base_url="http://127.0.0.1:8000"),
    )
