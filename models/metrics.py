"""
Snapshot and Assessment Types
Immutable readings of environment + vitals, and the risk assessment built from them
"""

from datetime import datetime
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict


class RiskLevel(str, Enum):
    """Respiratory risk, ordered by severity: Low < Moderate < High < Critical"""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def from_string(cls, value) -> "RiskLevel":
        """Case-insensitive lookup; anything unrecognized maps to LOW"""
        if isinstance(value, str):
            wanted = value.strip().lower()
            for level in cls:
                if level.value.lower() == wanted:
                    return level
        return cls.LOW

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity >= other.severity

    def __str__(self):
        return self.value


_SEVERITY = {level: rank for rank, level in enumerate(RiskLevel)}


class EnvironmentalMetrics(BaseModel):
    """Ambient sensor state at an instant"""

    model_config = ConfigDict(frozen=True)

    temperature: float  # °C
    humidity: float  # %
    pm25: float  # µg/m³
    snow_depth: float  # cm
    co_level: float  # ppm


class HealthMetrics(BaseModel):
    """Subject vitals at an instant"""

    model_config = ConfigDict(frozen=True)

    heart_rate: float  # bpm
    spo2: float  # %
    respiratory_rate: float  # breaths/min
    body_temp: float  # °C


class SystemSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    env: EnvironmentalMetrics
    health: HealthMetrics


class AssessmentResult(BaseModel):
    """Risk level plus the narrative explaining it"""

    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    summary: str
    recommendations: Tuple[str, ...]
    weather_context: str
    snapshot_time: datetime
    source: str = "rule_engine"
