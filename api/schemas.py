from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List, Optional
from models.metrics import AssessmentResult, EnvironmentalMetrics, HealthMetrics, RiskLevel, SystemSnapshot

class Alert(BaseModel):
    key: str
    metric: str
    value: float
    message: str

class SnapshotResponse(BaseModel):
    timestamp: datetime
    env: EnvironmentalMetrics
    health: HealthMetrics
    alerts: List[Alert]
    metric_alerts: Dict[str, bool]

class ChartPoint(BaseModel):
    timestamp: str
    time: str
    hr: float
    spO2: float
    temp: float
    pm25: float

class HistoryResponse(BaseModel):
    points: int
    capacity: int
    series: List[ChartPoint]
    trends: Dict[str, str]

class AssessmentResponse(BaseModel):
    risk_level: RiskLevel
    summary: str
    recommendations: List[str]
    weather_context: str
    source: str
    snapshot_time: datetime
    last_updated: datetime

class AdvisorStatus(BaseModel):
    mode: str
    label: str
    simulation_running: bool
    last_assessment: Optional[datetime]

def snapshot_response(snapshot: SystemSnapshot, alerts: List[dict], metric_alerts: Dict[str, bool]) -> SnapshotResponse:
    return SnapshotResponse(
        timestamp=snapshot.timestamp,
        env=snapshot.env,
        health=snapshot.health,
        alerts=[Alert(**alert) for alert in alerts],
        metric_alerts=metric_alerts,
    )

def assessment_response(result: AssessmentResult, last_updated: datetime) -> AssessmentResponse:
    return AssessmentResponse(
        risk_level=result.risk_level,
        summary=result.summary,
        recommendations=list(result.recommendations),
        weather_context=result.weather_context,
        source=result.source,
        snapshot_time=result.snapshot_time,
        last_updated=last_updated,
    )
