"""
Snapshot History
Bounded, most-recent-last record of snapshots for charts and trends
"""

import pandas as pd
from collections import deque
from typing import Dict, List, Optional
from models.metrics import SystemSnapshot
from utils.constants import TREND_TOLERANCE
from utils.helpers import calculate_trend, format_timestamp, metric_value

CHART_COLUMNS = ["timestamp", "time", "hr", "spO2", "temp", "pm25"]


class SnapshotHistory:
    """Keeps the most recent `capacity` snapshots; older ones are evicted"""

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items = deque(maxlen=capacity)

    def append(self, snapshot: SystemSnapshot) -> None:
        self._items.append(snapshot)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    @property
    def latest(self) -> Optional[SystemSnapshot]:
        return self._items[-1] if self._items else None

    def recent(self, points: Optional[int] = None) -> List[SystemSnapshot]:
        """The last `points` snapshots, oldest first"""
        items = list(self._items)
        if points is None:
            return items
        if points <= 0:
            return []
        return items[-points:]

    def to_frame(self, points: Optional[int] = None) -> pd.DataFrame:
        """
        Chart series for the last `points` snapshots

        Returns:
            DataFrame with a row per snapshot: time label, heart rate, SpO2,
            temperature and PM2.5
        """
        rows = [
            {
                'timestamp': format_timestamp(s.timestamp),
                'time': format_timestamp(s.timestamp, format="time_only"),
                'hr': s.health.heart_rate,
                'spO2': s.health.spo2,
                'temp': s.env.temperature,
                'pm25': s.env.pm25,
            }
            for s in self.recent(points)
        ]
        return pd.DataFrame(rows, columns=CHART_COLUMNS)

    def trends(self, points: Optional[int] = None) -> Dict[str, str]:
        """Direction of each tracked metric over the window (up/down/stable)"""
        window = self.recent(points)
        return {
            metric: calculate_trend([metric_value(s, metric) for s in window], tolerance)
            for metric, tolerance in TREND_TOLERANCE.items()
        }
