"""
Gemini Respiratory Risk Analyzer
Sends a snapshot to the Gemini generateContent endpoint and parses the structured reply
"""

import json
import logging
import time
import requests
from typing import Dict, Optional
from config.settings import settings
from models.metrics import AssessmentResult, RiskLevel, SystemSnapshot

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("riskLevel", "summary", "recommendations", "weatherContext")

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "riskLevel": {
            "type": "STRING",
            "enum": ["Low", "Moderate", "High", "Critical"],
            "description": "The assessed level of respiratory risk.",
        },
        "summary": {
            "type": "STRING",
            "description": "A brief 1-2 sentence summary of the current health situation.",
        },
        "recommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3 actionable recommendations.",
        },
        "weatherContext": {
            "type": "STRING",
            "description": "Brief observation about the weather impact (e.g., 'Cold Snap', 'Inversion Layer').",
        },
    },
    "required": list(REQUIRED_FIELDS),
}

PROMPT_TEMPLATE = """Analyze the following data from a respiratory health monitoring system in a snowy winter environment.

Environmental Conditions:
- Temperature: {temperature:.1f}°C
- Humidity: {humidity:.1f}%
- PM2.5: {pm25:.1f} µg/m³
- Snow Depth: {snow_depth:.1f} cm

User Vitals:
- Heart Rate: {heart_rate:.1f} bpm
- SpO2: {spo2:.1f}%
- Respiratory Rate: {respiratory_rate:.1f} breaths/min
- Body Temp: {body_temp:.1f}°C

Context: Cold air and high particulate matter (PM2.5) in winter are major triggers for bronchospasm and asthma.
Provide a JSON response assessing the respiratory risk."""


class RemoteAnalysisError(Exception):
    """The remote service gave no usable assessment"""


def build_prompt(snapshot: SystemSnapshot) -> str:
    """Embed the eight scored/displayed readings in the analysis prompt"""
    return PROMPT_TEMPLATE.format(
        temperature=snapshot.env.temperature,
        humidity=snapshot.env.humidity,
        pm25=snapshot.env.pm25,
        snow_depth=snapshot.env.snow_depth,
        heart_rate=snapshot.health.heart_rate,
        spo2=snapshot.health.spo2,
        respiratory_rate=snapshot.health.respiratory_rate,
        body_temp=snapshot.health.body_temp,
    )


def parse_assessment(text: Optional[str], snapshot: SystemSnapshot) -> AssessmentResult:
    """
    Parse the model's JSON text into an AssessmentResult

    Args:
        text: JSON document returned by the model
        snapshot: Snapshot the assessment refers to

    Returns:
        Assessment result

    Raises:
        RemoteAnalysisError: empty text, bad JSON, or a missing/invalid field
    """
    if not text:
        raise RemoteAnalysisError("No response from Gemini")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RemoteAnalysisError(f"Unparsable Gemini response: {e}") from e

    if not isinstance(data, dict):
        raise RemoteAnalysisError("Gemini response is not a JSON object")

    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise RemoteAnalysisError(f"Gemini response missing fields: {', '.join(missing)}")

    summary = data["summary"]
    context = data["weatherContext"]
    recommendations = data["recommendations"]

    if not isinstance(summary, str) or not summary.strip():
        raise RemoteAnalysisError("Gemini response has an empty summary")
    if not isinstance(context, str):
        raise RemoteAnalysisError("Gemini weatherContext is not a string")
    if (
        not isinstance(recommendations, list)
        or not recommendations
        or not all(isinstance(item, str) for item in recommendations)
    ):
        raise RemoteAnalysisError("Gemini recommendations must be a non-empty list of strings")

    return AssessmentResult(
        risk_level=RiskLevel.from_string(data["riskLevel"]),
        summary=summary,
        recommendations=tuple(recommendations),
        weather_context=context,
        snapshot_time=snapshot.timestamp,
        source=GeminiRiskAnalyzer.source,
    )


class GeminiRiskAnalyzer:
    """Remote respiratory risk assessment backed by Gemini"""

    source = "gemini"

    def __init__(self, api_key: str, model: str = None, base_url: str = None,
                 timeout: float = None, session: requests.Session = None):
        if not api_key:
            raise ValueError("Gemini API key required for remote analysis")

        self.api_key = api_key
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REMOTE_TIMEOUT
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_request(self, snapshot: SystemSnapshot) -> Dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(snapshot)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def _extract_text(self, payload: Dict) -> Optional[str]:
        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return None
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))

    def _read_body(self, response, deadline: float) -> bytes:
        chunks = []
        for chunk in response.iter_content(chunk_size=8192):
            if time.monotonic() > deadline:
                raise RemoteAnalysisError(f"Gemini response exceeded the {self.timeout}s deadline")
            chunks.append(chunk)
        return b"".join(chunks)

    def assess(self, snapshot: SystemSnapshot) -> AssessmentResult:
        """
        Ask Gemini for an assessment of the snapshot

        The whole exchange is bounded by self.timeout: requests applies it to
        the connect and to each socket read, and the streamed body is cut off
        once the overall deadline passes.

        Raises:
            RemoteAnalysisError: on timeout, HTTP error or malformed reply
        """
        deadline = time.monotonic() + self.timeout
        try:
            response = self.session.post(
                self.endpoint,
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=self.build_request(snapshot),
                timeout=self.timeout,
                stream=True,
            )
            try:
                response.raise_for_status()
                body = self._read_body(response, deadline)
            finally:
                response.close()
            payload = json.loads(body)
        except requests.exceptions.Timeout as e:
            raise RemoteAnalysisError(f"Gemini request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise RemoteAnalysisError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise RemoteAnalysisError(f"Gemini returned invalid JSON: {e}") from e

        logger.debug("Gemini response received for snapshot at %s", snapshot.timestamp)
        return parse_assessment(self._extract_text(payload), snapshot)
