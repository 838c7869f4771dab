"""
Respiratory Advisor
Chooses between Gemini and the rule engine and keeps the latest assessment
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional, Tuple
from config.settings import settings
from data.gemini_client import GeminiRiskAnalyzer, RemoteAnalysisError
from models.classifier import RiskClassifier
from models.metrics import AssessmentResult, SystemSnapshot
from utils.constants import ADVISOR_LABELS

logger = logging.getLogger(__name__)


class RespiratoryAdvisor:
    """
    Coordinates the two assessment strategies

    With a remote analyzer configured, every request tries it first and falls
    back to the local rule engine on any failure. Without one, the rule engine
    answers alone. assess() never raises.
    """

    def __init__(self, remote=None, local: RiskClassifier = None):
        self.remote = remote
        self.local = local or RiskClassifier()
        self._lock = threading.Lock()
        self._latest: Optional[AssessmentResult] = None
        self._latest_at: Optional[datetime] = None

    @classmethod
    def from_settings(cls, api_key: str = None) -> "RespiratoryAdvisor":
        """Build an advisor from configuration; a missing key selects mock mode"""
        if api_key is None:
            api_key = settings.GEMINI_API_KEY if settings.has_remote_credential() else ""
        remote = None
        if api_key:
            remote = GeminiRiskAnalyzer(
                api_key=api_key,
                model=settings.GEMINI_MODEL,
                timeout=settings.REMOTE_TIMEOUT,
            )
            logger.info("Respiratory advisor using Gemini model %s", remote.model)
        else:
            logger.info("No Gemini credential configured, using rule-based analysis")
        return cls(remote=remote)

    @property
    def mode(self) -> str:
        return "gemini" if self.remote is not None else "mock"

    @property
    def label(self) -> str:
        if self.remote is None:
            return ADVISOR_LABELS["mock"]
        return ADVISOR_LABELS["gemini"].format(model=getattr(self.remote, "model", "Gemini"))

    @property
    def latest(self) -> Optional[AssessmentResult]:
        with self._lock:
            return self._latest

    def assess(self, snapshot: SystemSnapshot) -> AssessmentResult:
        """
        Assess a snapshot with the best available strategy

        Args:
            snapshot: Readings to assess

        Returns:
            Assessment from Gemini, or from the rule engine if Gemini is
            unavailable or fails
        """
        return self.assess_entry(snapshot)[0]

    def assess_entry(self, snapshot: SystemSnapshot) -> Tuple[AssessmentResult, datetime]:
        """Assess a snapshot and return the result with the time it was stored"""
        result = None

        if self.remote is not None:
            try:
                result = self.remote.assess(snapshot)
            except RemoteAnalysisError as e:
                logger.warning("Gemini analysis failed, falling back to rule engine: %s", e)
            except Exception:
                logger.exception("Unexpected error in remote analysis, falling back to rule engine")

        if result is None:
            result = self.local.assess(snapshot)

        return self._store(result)

    @property
    def last_updated(self) -> Optional[datetime]:
        with self._lock:
            return self._latest_at

    def latest_entry(self) -> Tuple[Optional[AssessmentResult], Optional[datetime]]:
        """Latest result and when it was stored, read together"""
        with self._lock:
            return self._latest, self._latest_at

    def _store(self, result: AssessmentResult) -> Tuple[AssessmentResult, datetime]:
        # Last completion wins
        with self._lock:
            self._latest = result
            self._latest_at = datetime.now(timezone.utc)
            return result, self._latest_at
