"""
Tests for daily statistics, history frames and the chart builder.
"""
import math
from datetime import date

import pytest

from diet_tracker.analyzers import build_history_frame, compute_daily_stats, weight_history
from diet_tracker.errors import UnknownStrategy
from diet_tracker.models import ActivityLevel, DailyProfile, Gender, LogEntry, UserProfile
from diet_tracker.reports import ChartBuilder

DAY = date(2025, 1, 15)


@pytest.fixture
def example(foods, logs, profiles):
    """Worked example: female, 165 cm, 62.5 kg, age 33, moderately active."""
    profiles.set_user(UserProfile(Gender.FEMALE, 165, date(1991, 6, 1), "mifflin_st_jeor"))
    profiles.upsert(DailyProfile(DAY, 62.5, ActivityLevel.MODERATELY_ACTIVE))
    logs.append_entry(DAY, LogEntry("apple", 1))
    logs.append_entry(DAY, LogEntry("banana", 1.5))
    return foods, logs, profiles


def test_worked_example(example):
    """Test target, consumed and remaining for the worked example."""
    foods, logs, profiles = example
    stats = compute_daily_stats(profiles, logs, foods, DAY)
    assert stats.age == 33
    assert stats.bmr == pytest.approx(1330.25)
    assert stats.target == pytest.approx(2061.8875)
    assert stats.consumed == pytest.approx(209.5)
    assert stats.remaining == pytest.approx(2061.8875 - 209.5)


def test_harris_benedict_selected(example):
    """Test the profile's method selects the strategy."""
    foods, logs, profiles = example
    profiles.set_user(UserProfile(Gender.FEMALE, 165, date(1991, 6, 1), "harris_benedict"))
    stats = compute_daily_stats(profiles, logs, foods, DAY)
    assert stats.strategy == "harris_benedict"
    assert stats.bmr == pytest.approx(1393.8105)


def test_uses_latest_earlier_daily_profile(example):
    """Test a later date without measurements uses the latest earlier one."""
    foods, logs, profiles = example
    stats = compute_daily_stats(profiles, logs, foods, date(2025, 1, 20))
    assert stats.weight_kg == 62.5
    assert stats.consumed == 0.0
    assert stats.has_target


def test_no_profile(foods, logs, profiles):
    """Test stats without a profile have no target."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    stats = compute_daily_stats(profiles, logs, foods, DAY)
    assert stats.consumed == 52
    assert stats.target is None
    assert stats.remaining is None


def test_no_daily_profile_yet(example):
    """Test dates before the first weight have no target."""
    foods, logs, profiles = example
    stats = compute_daily_stats(profiles, logs, foods, date(2025, 1, 1))
    assert stats.strategy == "mifflin_st_jeor"
    assert not stats.has_target


def test_unknown_method(example):
    """Test a profile with an unregistered method fails loudly."""
    foods, logs, profiles = example
    profiles.set_user(UserProfile(Gender.FEMALE, 165, date(1991, 6, 1), "katch"))
    with pytest.raises(UnknownStrategy):
        compute_daily_stats(profiles, logs, foods, DAY)


def test_weight_history(profiles):
    """Test weights are listed by date."""
    profiles.upsert(DailyProfile(date(2025, 1, 20), 61))
    profiles.upsert(DailyProfile(DAY, 62.5))
    assert weight_history(profiles) == [(DAY, 62.5), (date(2025, 1, 20), 61)]


def test_history_frame(example):
    """Test the per-day frame marks unlogged days as missing."""
    foods, logs, profiles = example
    df = build_history_frame(profiles, logs, foods, date(2025, 1, 14), date(2025, 1, 16))
    assert list(df.columns) == ["date", "consumed", "target", "weight_kg"]
    assert len(df) == 3
    assert math.isnan(df.loc[0, "consumed"])
    assert math.isnan(df.loc[0, "target"])
    assert df.loc[1, "consumed"] == pytest.approx(209.5)
    assert df.loc[2, "target"] == pytest.approx(2061.8875)
    assert math.isnan(df.loc[2, "weight_kg"])


def test_chart_written(example, tmp_path, capsys):
    """Test a chart image is written when there is data."""
    foods, logs, profiles = example
    df = build_history_frame(profiles, logs, foods, date(2025, 1, 10), DAY)
    output = tmp_path / "chart.png"
    assert ChartBuilder(output).build_from_dataframe(df, window=3)
    assert output.exists()
    assert "Chart saved" in capsys.readouterr().out


def test_chart_no_data(foods, logs, profiles, tmp_path, capsys):
    """Test no chart is written without data."""
    df = build_history_frame(profiles, logs, foods, date(2025, 1, 10), DAY)
    output = tmp_path / "chart.png"
    assert not ChartBuilder(output).build_from_dataframe(df)
    assert not output.exists()
    assert "no data" in capsys.readouterr().out
