import pytest
from pydantic import ValidationError

from spoontrack.config import AppConfig, ExampleActivity


def test_default_config_values() -> None:
    config = AppConfig.load_default()

    assert config.initial_spoons == 12
    assert config.heartbeat_interval_seconds == 300.0
    assert [item.cost for item in config.example_activities] == [2, 4, 3, 2]
    assert config.health_check.element_ratio == 0.8


def test_load_reads_local_override() -> None:
    config = AppConfig.load()

    assert isinstance(config, AppConfig)
    assert config.health_check.base_url == "http://127.0.0.1:8000"


def test_example_activity_cost_is_range_checked() -> None:
    with pytest.raises(ValidationError):
        ExampleActivity(name="Marathon", cost=11)


def test_negative_initial_spoons_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(initial_spoons=-1)


def test_min_cost_above_max_cost_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(min_activity_cost=6, max_activity_cost=5, example_activities=[])


def test_example_activity_outside_cost_range_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(max_activity_cost=3, example_activities=[ExampleActivity(name="Big", cost=8)])

    with pytest.raises(ValidationError):
        AppConfig(min_activity_cost=3, example_activities=[ExampleActivity(name="Tiny", cost=1)])


def test_example_activities_inside_custom_range_accepted() -> None:
    config = AppConfig(max_activity_cost=3, example_activities=[ExampleActivity(name="Nap", cost=3)])

    assert [item.cost for item in config.example_activities] == [3]
