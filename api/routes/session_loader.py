import logging
from data.monitor import MonitoringSession
from models.advisor import RespiratoryAdvisor

logger = logging.getLogger(__name__)

# Shared by every router: one subject, one stream, one advisor
session = MonitoringSession()
advisor = RespiratoryAdvisor.from_settings()

def get_session() -> MonitoringSession:
    return session

def get_advisor() -> RespiratoryAdvisor:
    return advisor
