from fastapi import APIRouter, Depends, HTTPException
from api.schemas import AdvisorStatus, AssessmentResponse, assessment_response
from api.routes.session_loader import get_advisor, get_session
from data.monitor import MonitoringSession
from models.advisor import RespiratoryAdvisor

router = APIRouter()

@router.post("/api/v1/assessment", response_model=AssessmentResponse)
def run_assessment(
    session: MonitoringSession = Depends(get_session),
    advisor: RespiratoryAdvisor = Depends(get_advisor),
):
    """Assess the current snapshot (Gemini when configured, rule engine otherwise)"""
    result, last_updated = advisor.assess_entry(session.current)
    return assessment_response(result, last_updated)

@router.get("/api/v1/assessment/latest", response_model=AssessmentResponse)
def get_latest_assessment(advisor: RespiratoryAdvisor = Depends(get_advisor)):
    """Most recently completed assessment"""
    result, last_updated = advisor.latest_entry()
    if result is None:
        raise HTTPException(status_code=404, detail="No assessment has been run yet")
    return assessment_response(result, last_updated)

@router.get("/api/v1/advisor/status", response_model=AdvisorStatus)
def get_advisor_status(
    session: MonitoringSession = Depends(get_session),
    advisor: RespiratoryAdvisor = Depends(get_advisor),
):
    return AdvisorStatus(
        mode=advisor.mode,
        label=advisor.label,
        simulation_running=session.running,
        last_assessment=advisor.last_updated,
    )
