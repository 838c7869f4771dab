from datetime import datetime, timezone

import pytest

from models.metrics import EnvironmentalMetrics, HealthMetrics, SystemSnapshot

T0 = datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)


class FixedRandom:
    """Random source that always returns the same value"""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def make_snapshot(
    temperature: float = -2.5,
    humidity: float = 78.0,
    pm25: float = 12.0,
    snow_depth: float = 15.0,
    co_level: float = 0.5,
    heart_rate: float = 75.0,
    spo2: float = 98.0,
    respiratory_rate: float = 16.0,
    body_temp: float = 36.8,
    timestamp: datetime = T0,
) -> SystemSnapshot:
    return SystemSnapshot(
        timestamp=timestamp,
        env=EnvironmentalMetrics(
            temperature=temperature,
            humidity=humidity,
            pm25=pm25,
            snow_depth=snow_depth,
            co_level=co_level,
        ),
        health=HealthMetrics(
            heart_rate=heart_rate,
            spo2=spo2,
            respiratory_rate=respiratory_rate,
            body_temp=body_temp,
        ),
    )


@pytest.fixture
def snapshot() -> SystemSnapshot:
    return make_snapshot()
