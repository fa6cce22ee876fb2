import io

import pandas as pd
import pytest

from erlangkit.io import read_interval_csv, write_plan_csv
from erlangkit.plan import PlanTargets, staff_intervals


def _forecast() -> pd.DataFrame:
    # 25 calls in 15 minutes = 100 calls/hour
    return pd.DataFrame(
        {
            "interval_start": ["2026-01-26 09:00:00", "2026-01-26 09:15:00", "2026-01-26 09:30:00"],
            "interval_minutes": [15, 15, 15],
            "volume": [25.0, 25.0, 0.0],
            "aht_seconds": [180.0, 180.0, 180.0],
            "is_open": [True, False, True],
        }
    )


def test_staff_intervals_service_level():
    out = staff_intervals(_forecast(), PlanTargets(service_level_target=0.80, service_level_time_seconds=20))

    assert len(out) == 3
    assert out.loc[0, "calls_per_hour"] == pytest.approx(100.0)
    assert out.loc[0, "erlangs"] == pytest.approx(5.0)
    assert out.loc[0, "agents"] == 8
    assert out.loc[0, "fractional_agents"] == pytest.approx(7.4263, abs=1e-3)
    assert out.loc[0, "service_level"] >= 0.80
    assert out.loc[0, "asa_seconds"] == 10
    assert out.loc[0, "trunks"] > 8


def test_closed_and_empty_intervals_are_zero():
    out = staff_intervals(_forecast())
    for i in (1, 2):
        assert out.loc[i, "agents"] == 0
        assert out.loc[i, "trunks"] == 0
        assert out.loc[i, "service_level"] == 1.0


def test_staff_intervals_asa_target():
    out = staff_intervals(_forecast(), PlanTargets(target_type="asa", asa_target_seconds=30))
    assert out.loc[0, "agents"] == 7
    assert out.loc[0, "fractional_agents"] == 7.0
    assert out.loc[0, "asa_seconds"] <= 30


def test_plan_targets_validation():
    with pytest.raises(ValueError):
        PlanTargets(service_level_target=0.0)
    with pytest.raises(ValueError):
        PlanTargets(target_type="asa", asa_target_seconds=0)
    with pytest.raises(ValueError):
        PlanTargets(target_type="occupancy")  # type: ignore[arg-type]


def test_read_interval_csv_with_hourly_rates():
    text = (
        "interval_start,interval_minutes,calls_per_hour,aht_seconds\n"
        "2026-01-26 09:30,30,120,180\n"
        "2026-01-26 09:00,30,100,180\n"
    )
    df = read_interval_csv(io.StringIO(text))

    # sorted, volume per interval, open by default
    assert df.loc[0, "interval_start"] == pd.Timestamp("2026-01-26 09:00")
    assert df.loc[0, "volume"] == pytest.approx(50.0)
    assert df.loc[1, "volume"] == pytest.approx(60.0)
    assert df["is_open"].all()
    assert "calls_per_hour" not in df.columns


def test_read_interval_csv_open_flags_and_missing_columns():
    text = (
        "interval_start,interval_minutes,volume,aht_seconds,is_open\n"
        "2026-01-26 09:00,15,25,180,yes\n"
        "2026-01-26 09:15,15,25,180,no\n"
    )
    df = read_interval_csv(io.StringIO(text))
    assert df["is_open"].tolist() == [True, False]

    with pytest.raises(ValueError, match="volume"):
        read_interval_csv(io.StringIO("interval_start,interval_minutes,aht_seconds\n2026-01-26 09:00,15,180\n"))


def test_write_plan_csv_round_trip():
    out = staff_intervals(_forecast())
    text = write_plan_csv(out)
    back = pd.read_csv(io.StringIO(text))
    assert back["agents"].tolist() == [8, 0, 0]
    assert back.loc[0, "fractional_agents"] == pytest.approx(7.43, abs=0.01)


def test_read_interval_csv_rejects_partial_minutes():
    text = (
        "interval_start,interval_minutes,calls_per_hour,aht_seconds\n"
        "2026-01-26 09:00,7.5,100,180\n"
    )
    with pytest.raises(ValueError, match="whole minutes"):
        read_interval_csv(io.StringIO(text))
