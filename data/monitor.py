"""
Monitoring Session
Owns the current snapshot and its history, and ticks the simulator on a fixed cadence
"""

import logging
import threading
from datetime import datetime
from typing import List, Optional
from config.settings import settings
from data.history import SnapshotHistory
from models.metrics import SystemSnapshot
from models.simulator import StateSimulator, initial_snapshot

logger = logging.getLogger(__name__)


class MonitoringSession:
    """
    Single-subject sensor stream

    The simulator itself holds no state; this session keeps the one "current
    snapshot" reference and replaces it under a lock on every tick.
    """

    def __init__(self, simulator: StateSimulator = None, history_size: int = None,
                 interval: float = None, start_snapshot: SystemSnapshot = None):
        self.simulator = simulator or StateSimulator(seed=settings.SIMULATION_SEED)
        self.history = SnapshotHistory(settings.HISTORY_SIZE if history_size is None else history_size)
        self.interval = settings.TICK_INTERVAL if interval is None else interval
        self._current = start_snapshot or initial_snapshot()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def current(self) -> SystemSnapshot:
        with self._lock:
            return self._current

    def recent(self, points: int = None) -> List[SystemSnapshot]:
        with self._lock:
            return self.history.recent(points)

    def tick(self, now: datetime = None) -> SystemSnapshot:
        """Advance the simulation one step and record the new snapshot"""
        with self._lock:
            snapshot = self.simulator.advance(self._current, now)
            self._current = snapshot
            self.history.append(snapshot)
        logger.debug(
            "Tick: temp=%.1f pm25=%.1f hr=%.1f spo2=%.1f",
            snapshot.env.temperature, snapshot.env.pm25,
            snapshot.health.heart_rate, snapshot.health.spo2,
        )
        return snapshot

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start background ticking; returns False if disabled or already running"""
        if self.running:
            return False
        if self.interval <= 0:
            logger.warning("Tick interval %s is not positive, background simulation not started", self.interval)
            return False

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="simulation-ticker", daemon=True)
        self._thread.start()
        logger.info("Simulation started (every %.1fs, history of %d)", self.interval, self.history.capacity)
        return True

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Simulation ticker did not stop within %.1fs", timeout)
            return
        self._thread = None
        logger.info("Simulation stopped")

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Simulation tick failed")
