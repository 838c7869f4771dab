"""
Offline Simulation Run
Ticks the simulator without the API and assesses the stream at a fixed stride
"""

import os
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pandas as pd
from config.settings import settings
from data.monitor import MonitoringSession
from models.advisor import RespiratoryAdvisor
from models.simulator import StateSimulator, initial_snapshot


def run_session(ticks: int = 100, seed: int = None, assess_every: int = 10,
                use_remote: bool = False) -> pd.DataFrame:
    """
    Run a simulated session and collect one row per assessment

    Args:
        ticks: Number of simulation steps
        seed: Random seed (None for a fresh random run)
        assess_every: Assess after every N ticks
        use_remote: Try Gemini when a key is configured

    Returns:
        DataFrame of readings, risk level and narrative per assessment
    """
    if ticks < 0:
        raise ValueError(f"ticks must be non-negative, got {ticks}")
    if assess_every < 1:
        raise ValueError(f"assess_every must be at least 1, got {assess_every}")

    start = datetime.now(timezone.utc)
    session = MonitoringSession(
        simulator=StateSimulator(seed=seed),
        interval=0,
        start_snapshot=initial_snapshot(start),
    )
    advisor = RespiratoryAdvisor.from_settings(api_key=None if use_remote else "")

    rows = []
    for step in range(1, ticks + 1):
        snapshot = session.tick(start + timedelta(seconds=settings.TICK_INTERVAL * step))
        if step % assess_every:
            continue

        result = advisor.assess(snapshot)
        rows.append({
            'tick': step,
            'temperature': round(snapshot.env.temperature, 1),
            'pm25': round(snapshot.env.pm25, 1),
            'snow_depth': round(snapshot.env.snow_depth, 1),
            'heart_rate': round(snapshot.health.heart_rate, 1),
            'spo2': round(snapshot.health.spo2, 1),
            'risk_level': result.risk_level.value,
            'weather_context': result.weather_context,
            'source': result.source,
        })

    return pd.DataFrame(rows)


def main(ticks: int = 100, seed: int = None, assess_every: int = 10,
         use_remote: bool = False, output: str = None):
    print("\n" + "="*70)
    print("RespiGuard Snow - Offline Simulation")
    print("="*70)
    print(f"  Ticks: {ticks}")
    print(f"  Seed: {seed if seed is not None else 'random'}")
    print(f"  Assess every: {assess_every} ticks")
    print(f"  Remote analysis: {'requested' if use_remote else 'off'}")

    df = run_session(ticks=ticks, seed=seed, assess_every=assess_every, use_remote=use_remote)

    if df.empty:
        print("\n⚠️  No assessments produced (increase --ticks or lower --assess-every)")
        return df

    print("\n" + df.to_string(index=False))
    print("\nRisk level counts:")
    print(df['risk_level'].value_counts().to_string())

    if output:
        df.to_csv(output, index=False)
        print(f"\n✓ Results saved to {output}")

    return df


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Run an offline RespiGuard simulation')
    parser.add_argument(
        '--ticks',
        type=int,
        default=100,
        help='Number of simulation steps (default: 100)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for a reproducible run'
    )
    parser.add_argument(
        '--assess-every',
        type=int,
        default=10,
        help='Assess after every N ticks (default: 10)'
    )
    parser.add_argument(
        '--remote',
        action='store_true',
        help='Use Gemini when GEMINI_API_KEY is set (default: rule engine only)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Optional CSV path for the results'
    )

    args = parser.parse_args()
    if args.assess_every < 1:
        parser.error("--assess-every must be at least 1")

    main(
        ticks=args.ticks,
        seed=args.seed,
        assess_every=args.assess_every,
        use_remote=args.remote,
        output=args.output
    )
