import pandas as pd
import pytest

from erlangkit.validation import flag_intervals, validate_interval_df


def _intervals() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "interval_start": ["2026-01-26 09:00:00", "2026-01-26 09:15:00", "2026-01-26 09:30:00"],
            "interval_minutes": [15, 15, 15],
            "volume": [10.0, -1.0, 0.0],
            "aht_seconds": [300.0, 0.0, 300.0],
            "is_open": [True, True, True],
        }
    )


def test_flag_intervals_flags_expected_columns():
    out = flag_intervals(_intervals())

    assert len(out) == 3

    # row 0: ok volume, ok aht, open with volume
    assert not out.loc[0, "flag_volume_negative"]
    assert not out.loc[0, "flag_aht_nonpositive"]
    assert not out.loc[0, "flag_interval_nonpositive"]
    assert not out.loc[0, "flag_open_with_zero_volume"]

    # row 1: negative volume + nonpositive AHT should flag
    assert out.loc[1, "flag_volume_negative"]
    assert out.loc[1, "flag_aht_nonpositive"]

    # row 2: open but nothing forecast
    assert out.loc[2, "flag_open_with_zero_volume"]


def test_validate_interval_df_accepts_good_table():
    validate_interval_df(_intervals())


def test_validate_interval_df_missing_columns():
    df = _intervals().drop(columns=["aht_seconds"])
    with pytest.raises(ValueError, match="aht_seconds"):
        validate_interval_df(df)


def test_validate_interval_df_bad_values():
    df = _intervals()
    df.loc[1, "interval_start"] = "not a date"
    with pytest.raises(ValueError, match="interval_start"):
        validate_interval_df(df)

    df = _intervals()
    df["interval_minutes"] = [15, 0, 15]
    with pytest.raises(ValueError, match="interval_minutes"):
        validate_interval_df(df)


def test_validate_interval_df_empty():
    with pytest.raises(ValueError, match="empty"):
        validate_interval_df(_intervals().iloc[0:0])


def test_validate_interval_df_rejects_partial_minutes():
    df = _intervals()
    df["interval_minutes"] = [15, 7.5, 15]
    with pytest.raises(ValueError, match="whole minutes"):
        validate_interval_df(df)
