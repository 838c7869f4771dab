import pandas as pd
import pytest

from scripts.simulate_session import main, run_session


def test_one_row_per_assessment_stride() -> None:
    df = run_session(ticks=25, seed=4, assess_every=5)
    assert len(df) == 25 // 5
    assert list(df["tick"]) == [5, 10, 15, 20, 25]
    assert set(df["source"]) == {"rule_engine"}
    assert set(df["risk_level"]) <= {"Low", "Moderate", "High", "Critical"}


def test_seeded_runs_are_reproducible() -> None:
    first = run_session(ticks=30, seed=11, assess_every=3)
    second = run_session(ticks=30, seed=11, assess_every=3)
    pd.testing.assert_frame_equal(first, second)


def test_short_run_produces_no_rows() -> None:
    assert run_session(ticks=4, seed=1, assess_every=10).empty
    assert run_session(ticks=0, seed=1, assess_every=1).empty


@pytest.mark.parametrize("kwargs", [{"assess_every": 0}, {"assess_every": -2}, {"ticks": -1}])
def test_invalid_arguments_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        run_session(seed=1, **kwargs)


def test_main_writes_csv(tmp_path, capsys) -> None:
    out = tmp_path / "run.csv"
    df = main(ticks=10, seed=2, assess_every=2, output=str(out))

    assert len(df) == 5
    saved = pd.read_csv(out)
    assert list(saved["tick"]) == list(df["tick"])
    assert "Risk level counts" in capsys.readouterr().out
