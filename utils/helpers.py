"""
Helper Functions for RespiGuard Snow
Utility functions used across the application
"""

import numpy as np
from datetime import datetime
from typing import Dict, List, Optional
from utils.constants import BANNER_ALERTS, CARD_ALERTS, METRICS


def clamp(value: float, low: Optional[float] = None, high: Optional[float] = None) -> float:
    """
    Saturate a value into [low, high]

    Args:
        value: Value to bound
        low: Lower bound, or None for unbounded
        high: Upper bound, or None for unbounded

    Returns:
        The bounded value
    """
    if low is not None:
        value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def calculate_trend(values: List[float], tolerance: float = 1e-9) -> str:
    """
    Determine trend direction from values

    Args:
        values: List of sequential values
        tolerance: Slope magnitude below which the series counts as flat

    Returns:
        Trend string (up/down/stable)
    """
    if len(values) < 2:
        return "stable"

    # Calculate slope
    x = list(range(len(values)))
    slope = np.polyfit(x, values, 1)[0]

    if slope > tolerance:
        return "up"
    elif slope < -tolerance:
        return "down"
    else:
        return "stable"


def metric_value(snapshot, metric: str) -> float:
    """Read a metric from a snapshot by name, from whichever group holds it"""
    group = METRICS[metric]["group"]
    return getattr(getattr(snapshot, group), metric)


def _breaches(value: float, rule: Dict) -> bool:
    if "below" in rule and value < rule["below"]:
        return True
    if "above" in rule and value > rule["above"]:
        return True
    return False


def detect_alerts(snapshot) -> List[Dict]:
    """
    Banner alerts raised by the current readings

    Args:
        snapshot: SystemSnapshot to inspect

    Returns:
        List of alerts with key, metric and message
    """
    alerts = []
    for key, rule in BANNER_ALERTS.items():
        value = metric_value(snapshot, rule["metric"])
        if _breaches(value, rule):
            alerts.append({
                "key": key,
                "metric": rule["metric"],
                "value": round(value, 1),
                "message": rule["message"],
            })
    return alerts


def flag_metrics(snapshot) -> Dict[str, bool]:
    """Per-metric card alert flags (True when the reading is out of comfort range)"""
    return {
        metric: _breaches(metric_value(snapshot, metric), rule)
        for metric, rule in CARD_ALERTS.items()
    }


def format_timestamp(dt: datetime, format: str = "iso") -> str:
    """
    Format datetime for API responses

    Args:
        dt: Datetime object
        format: Format type (iso/time_only)

    Returns:
        Formatted string
    """
    if format == "iso":
        return dt.isoformat()
    elif format == "time_only":
        return dt.strftime("%H:%M:%S")
    else:
        return str(dt)
