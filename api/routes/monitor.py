from fastapi import APIRouter, Depends, Query
from api.schemas import ChartPoint, HistoryResponse, SnapshotResponse, snapshot_response
from api.routes.session_loader import get_session
from config.settings import settings
from data.history import SnapshotHistory
from data.monitor import MonitoringSession
from utils.helpers import detect_alerts, flag_metrics

router = APIRouter()

@router.get("/api/v1/snapshot", response_model=SnapshotResponse)
def get_snapshot(session: MonitoringSession = Depends(get_session)):
    """Current readings with banner and card alerts"""
    snapshot = session.current
    return snapshot_response(snapshot, detect_alerts(snapshot), flag_metrics(snapshot))

@router.get("/api/v1/history", response_model=HistoryResponse)
def get_history(
    points: int = Query(settings.CHART_POINTS, ge=1, le=settings.HISTORY_SIZE),
    session: MonitoringSession = Depends(get_session),
):
    """Chart series and per-metric trends for the most recent snapshots"""
    window = SnapshotHistory(capacity=points)
    for snapshot in session.recent(points):
        window.append(snapshot)

    frame = window.to_frame()
    return HistoryResponse(
        points=len(frame),
        capacity=session.history.capacity,
        series=[ChartPoint(**row) for row in frame.to_dict(orient="records")],
        trends=window.trends(),
    )

@router.post("/api/v1/simulation/tick", response_model=SnapshotResponse)
def advance_simulation(session: MonitoringSession = Depends(get_session)):
    """Advance the simulation one step right away"""
    snapshot = session.tick()
    return snapshot_response(snapshot, detect_alerts(snapshot), flag_metrics(snapshot))
