from datetime import timedelta

import pytest

from conftest import T0, make_snapshot
from data.history import CHART_COLUMNS, SnapshotHistory


def _series(n: int, **overrides):
    return [
        make_snapshot(timestamp=T0 + timedelta(seconds=2 * i), heart_rate=70.0 + i, **overrides)
        for i in range(n)
    ]


def test_oldest_snapshots_are_evicted() -> None:
    history = SnapshotHistory(capacity=50)
    snaps = _series(60)
    for s in snaps:
        history.append(s)

    assert len(history) == 50
    assert list(history) == snaps[10:]
    assert history.latest == snaps[-1]


def test_recent_returns_most_recent_last() -> None:
    history = SnapshotHistory(capacity=10)
    snaps = _series(8)
    for s in snaps:
        history.append(s)

    assert history.recent(3) == snaps[-3:]
    assert history.recent() == snaps
    assert history.recent(0) == []
    assert history.recent(100) == snaps


def test_empty_history() -> None:
    history = SnapshotHistory()
    assert history.latest is None
    assert history.to_frame().empty
    assert list(history.to_frame().columns) == CHART_COLUMNS
    assert set(history.trends().values()) == {"stable"}


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SnapshotHistory(capacity=0)


def test_chart_frame_columns_and_values() -> None:
    history = SnapshotHistory()
    for s in _series(25, temperature=-4.0, pm25=18.0, spo2=97.5):
        history.append(s)

    frame = history.to_frame(points=20)
    assert len(frame) == 20
    assert list(frame.columns) == CHART_COLUMNS
    assert frame["hr"].iloc[0] == 75.0
    assert frame["hr"].iloc[-1] == 94.0
    assert frame["spO2"].unique().tolist() == [97.5]
    assert frame["temp"].unique().tolist() == [-4.0]
    assert frame["time"].iloc[-1] == "08:00:48"


def test_trends_follow_slope() -> None:
    history = SnapshotHistory()
    for s in _series(10, spo2=97.0):
        history.append(s)

    trends = history.trends()
    assert trends["heart_rate"] == "up"
    assert trends["spo2"] == "stable"
    assert trends["temperature"] == "stable"
