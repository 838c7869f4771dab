"""
State Simulator
Advances the coupled environment/health state by one random-walk step
"""

import random
from datetime import datetime, timezone
from typing import Optional
from models.metrics import EnvironmentalMetrics, HealthMetrics, SystemSnapshot
from utils.constants import (
    INITIAL_ENV,
    INITIAL_HEALTH,
    METRIC_BOUNDS,
    RANDOM_WALK,
    SNOWFALL_INCREMENT,
    SNOWFALL_PROBABILITY_CUTOFF,
    STRESS_FACTOR,
    STRESS_PM25_THRESHOLD,
    STRESS_TEMPERATURE_THRESHOLD,
)
from utils.helpers import clamp


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def initial_snapshot(now: Optional[datetime] = None) -> SystemSnapshot:
    """Starting state of a monitoring session"""
    return SystemSnapshot(
        timestamp=_as_utc(now or datetime.now(timezone.utc)),
        env=EnvironmentalMetrics(**INITIAL_ENV),
        health=HealthMetrics(**INITIAL_HEALTH),
    )


class StateSimulator:
    """
    Produces the next snapshot from the previous one

    Every field update draws its own uniform value from the random source, so
    seeding the source makes a whole session reproducible. Any object with a
    random() method returning floats in [0, 1) will do.
    """

    def __init__(self, rng=None, seed: Optional[int] = None):
        """
        Initialize simulator

        Args:
            rng: Random source (defaults to a new random.Random)
            seed: Seed for the default random source
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def _walk(self, metric: str, value: float, multiplier: float = 1.0) -> float:
        step = RANDOM_WALK[metric]
        bounds = METRIC_BOUNDS[metric]
        u = self.rng.random()
        return clamp(
            value + (u - step["center"]) * step["scale"] * multiplier,
            bounds["min"],
            bounds["max"],
        )

    def stress_factor(self, temperature: float, pm25: float) -> float:
        """Multiplier applied to heart rate drift under cold or polluted air"""
        if pm25 > STRESS_PM25_THRESHOLD or temperature < STRESS_TEMPERATURE_THRESHOLD:
            return STRESS_FACTOR
        return 1.0

    def advance(self, previous: SystemSnapshot, now: Optional[datetime] = None) -> SystemSnapshot:
        """
        Advance the state by one tick

        Args:
            previous: Current snapshot (left untouched)
            now: Time of the new reading; naive values are taken as UTC and
                 never earlier than previous.timestamp

        Returns:
            New snapshot
        """
        env = previous.env
        health = previous.health

        temperature = self._walk("temperature", env.temperature)
        pm25 = self._walk("pm25", env.pm25)
        snowfall = SNOWFALL_INCREMENT if self.rng.random() > SNOWFALL_PROBABILITY_CUTOFF else 0.0
        snow_depth = clamp(env.snow_depth + snowfall, METRIC_BOUNDS["snow_depth"]["min"])
        humidity = self._walk("humidity", env.humidity)

        stress = self.stress_factor(temperature, pm25)
        heart_rate = self._walk("heart_rate", health.heart_rate, multiplier=stress)
        spo2 = self._walk("spo2", health.spo2)
        respiratory_rate = self._walk("respiratory_rate", health.respiratory_rate)

        timestamp = _as_utc(now or datetime.now(timezone.utc))
        floor = _as_utc(previous.timestamp)
        if timestamp < floor:
            timestamp = floor

        return SystemSnapshot(
            timestamp=timestamp,
            env=EnvironmentalMetrics(
                temperature=temperature,
                humidity=humidity,
                pm25=pm25,
                snow_depth=snow_depth,
                co_level=env.co_level,
            ),
            health=HealthMetrics(
                heart_rate=heart_rate,
                spo2=spo2,
                respiratory_rate=respiratory_rate,
                body_temp=health.body_temp,
            ),
        )
