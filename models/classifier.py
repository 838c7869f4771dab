"""
Risk Classification Model
Classifies a snapshot into a respiratory risk level
Provides a weather context and recommendations for the subject
"""

from typing import Callable, Dict, List, NamedTuple
from models.metrics import AssessmentResult, RiskLevel, SystemSnapshot
from utils.constants import NARRATIVES, RISK_SCORE_THRESHOLDS, RISK_WEIGHTS, WEATHER_CONTEXTS


class NarrativeRule(NamedTuple):
    """One narrative branch: fires when predicate(snapshot) holds"""

    key: str
    predicate: Callable[[SystemSnapshot], bool]
    template: Callable[[RiskLevel], str]


def _severe_variant(name: str) -> Callable[[RiskLevel], str]:
    def choose(level: RiskLevel) -> str:
        return f"{name}_severe" if level >= RiskLevel.HIGH else name
    return choose


def _single_variant(name: str) -> Callable[[RiskLevel], str]:
    return lambda level: name


# Priority order matters: first match wins
NARRATIVE_RULES: List[NarrativeRule] = [
    NarrativeRule(
        "cold_snap",
        lambda s: s.env.temperature < -10,
        _severe_variant("cold_snap"),
    ),
    NarrativeRule(
        "particulates",
        lambda s: s.env.pm25 > 35,
        _severe_variant("particulates"),
    ),
    NarrativeRule(
        "hypoxemia",
        lambda s: s.health.spo2 < 95,
        _single_variant("hypoxemia"),
    ),
    NarrativeRule(
        "inversion",
        lambda s: s.env.temperature < 0 and s.env.pm25 > 20,
        _single_variant("inversion"),
    ),
    NarrativeRule(
        "snow_exertion",
        lambda s: s.env.snow_depth > 10 and s.health.heart_rate > 100,
        _single_variant("snow_exertion"),
    ),
]

DEFAULT_NARRATIVE = NarrativeRule("stable", lambda s: True, _single_variant("stable"))


class RiskClassifier:
    """
    Rule-based respiratory risk classifier

    Scores four weighted factors into a risk level, then picks the narrative
    for the most climatically dominant condition. Pure: the same snapshot
    always gives the same result.
    """

    source = "rule_engine"

    def temperature_factor(self, temperature: float) -> float:
        if temperature < -10:
            return 2.0
        elif temperature < 0:
            return 1.5
        return 1.0

    def pm25_factor(self, pm25: float) -> float:
        if pm25 > 35:
            return 2.0
        elif pm25 > 25:
            return 1.5
        return 1.0

    def spo2_factor(self, spo2: float) -> float:
        if spo2 < 95:
            return 2.0
        elif spo2 < 97:
            return 1.5
        return 1.0

    def heart_rate_factor(self, heart_rate: float) -> float:
        if heart_rate > 100:
            return 1.5
        return 1.0

    def risk_factors(self, snapshot: SystemSnapshot) -> Dict[str, float]:
        """Severity multiplier per scored metric"""
        return {
            'temperature': self.temperature_factor(snapshot.env.temperature),
            'pm25': self.pm25_factor(snapshot.env.pm25),
            'spo2': self.spo2_factor(snapshot.health.spo2),
            'heart_rate': self.heart_rate_factor(snapshot.health.heart_rate),
        }

    def risk_score(self, snapshot: SystemSnapshot) -> float:
        """
        Weighted sum of the factor scores

        Rounded to two places so band edges such as 1.5 are not lost to
        floating point error (every reachable score is a multiple of 0.05).
        """
        factors = self.risk_factors(snapshot)
        score = sum(RISK_WEIGHTS[name] * factor for name, factor in factors.items())
        return round(score, 2)

    def score_to_level(self, score: float) -> RiskLevel:
        for threshold, level in RISK_SCORE_THRESHOLDS:
            if score >= threshold:
                return RiskLevel(level)
        return RiskLevel.LOW

    def select_narrative(self, snapshot: SystemSnapshot) -> NarrativeRule:
        for rule in NARRATIVE_RULES:
            if rule.predicate(snapshot):
                return rule
        return DEFAULT_NARRATIVE

    def classify(self, snapshot: SystemSnapshot) -> AssessmentResult:
        """
        Rule-based classification

        Args:
            snapshot: Readings to assess

        Returns:
            Assessment with risk level, summary, recommendations and weather context
        """
        level = self.score_to_level(self.risk_score(snapshot))
        rule = self.select_narrative(snapshot)
        narrative = NARRATIVES[rule.template(level)]

        return AssessmentResult(
            risk_level=level,
            summary=narrative['summary'],
            recommendations=tuple(narrative['recommendations']),
            weather_context=WEATHER_CONTEXTS[rule.key],
            snapshot_time=snapshot.timestamp,
            source=self.source,
        )

    def assess(self, snapshot: SystemSnapshot) -> AssessmentResult:
        """Same as classify(); never raises"""
        return self.classify(snapshot)

    def explain(self, snapshot: SystemSnapshot) -> Dict:
        """Score breakdown for diagnostics"""
        score = self.risk_score(snapshot)
        return {
            'factors': self.risk_factors(snapshot),
            'weights': dict(RISK_WEIGHTS),
            'risk_score': score,
            'risk_level': self.score_to_level(score),
            'narrative': self.select_narrative(snapshot).key,
        }
