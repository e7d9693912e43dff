"""
Tests for repositories and the text stores.
"""
from datetime import date, datetime

import pytest

from diet_tracker.data import FoodRepository, LogRepository, ProfileRepository, seed_foods
from diet_tracker.data.storage import format_number, parse_number, read_records, write_records
from diet_tracker.errors import CycleWouldForm, NotFound, UnknownFood
from diet_tracker.models import (
    ActivityLevel,
    BasicFood,
    CompositeFood,
    DailyLog,
    DailyProfile,
    Gender,
    LogEntry,
    UserProfile,
)

DAY = date(2025, 1, 15)


# Storage
def test_read_missing_file(tmp_path):
    """Test a missing store reads as no records."""
    assert read_records(tmp_path / "nope.txt", 4) == []


def test_write_then_read_pads_short_rows(tmp_path):
    """Test records of different widths come back padded."""
    path = tmp_path / "store.txt"
    write_records(path, [["A", "1"], ["B", "2", "3"]])
    assert read_records(path, 3) == [["A", "1", ""], ["B", "2", "3"]]


def test_read_skips_overlong_lines(tmp_path):
    """Test lines with too many fields are skipped."""
    path = tmp_path / "store.txt"
    path.write_text("a|b\nx|y|z|extra\nc|d\n", encoding="utf-8")
    assert read_records(path, 2) == [["a", "b"], ["c", "d"]]


def test_format_number():
    """Test numbers are stored compactly."""
    assert format_number(52.0) == "52"
    assert format_number(1.5) == "1.5"


def test_parse_number_default():
    """Test malformed numbers fall back to the default."""
    assert parse_number("abc", 0.0) == 0.0
    assert parse_number("2.5") == 2.5


# Repository contract
def test_get_returns_copy(foods):
    """Test changing a fetched entity does not change the repository."""
    apple = foods.get("apple")
    apple.calories = 999
    assert foods.get("apple").calories == 52


def test_get_missing(foods):
    """Test missing keys raise NotFound."""
    with pytest.raises(NotFound):
        foods.get("pizza")


def test_remove_missing(foods):
    """Test removing a missing key raises NotFound."""
    with pytest.raises(NotFound):
        foods.remove("pizza")


def test_upsert_rejects_cycle(foods):
    """Test upsert re-validates the component graph."""
    with pytest.raises(CycleWouldForm):
        foods.upsert(CompositeFood("pb_sandwich", "PB", set(), [("pbj", 1)]))


def test_upsert_rejects_unknown_component(foods):
    """Test upsert rejects composites with unknown components."""
    with pytest.raises(UnknownFood):
        foods.upsert(CompositeFood("salad", "Salad", set(), [("lettuce", 1)]))


# Food store
def test_food_round_trip(tmp_path, foods):
    """Test foods survive save and load in the same order."""
    foods.filepath = tmp_path / "foods.txt"
    foods.save()

    loaded = FoodRepository(tmp_path / "foods.txt")
    loaded.load()
    assert loaded.keys() == foods.keys()
    assert loaded.get("pbj") == foods.get("pbj")
    assert loaded.resolve_calories("pbj") == 400
    assert loaded.load_warnings == []


def test_food_store_format(tmp_path):
    """Test the line format of basic and composite foods."""
    repo = FoodRepository(tmp_path / "foods.txt")
    repo.upsert(BasicFood("apple", "Apple", {"fruit", "red"}, 52))
    repo.upsert(CompositeFood("snack", "Snack", set(), [("apple", 1.5)]))
    repo.save()

    lines = (tmp_path / "foods.txt").read_text(encoding="utf-8").splitlines()
    assert lines == ["B|apple|Apple|fruit,red|52", "C|snack|Snack||apple:1.5"]


def test_food_load_forward_reference(tmp_path):
    """Test a composite may reference a food defined later in the file."""
    path = tmp_path / "foods.txt"
    path.write_text("C|snack|Snack|x|apple:2\nB|apple|Apple|fruit|52\n", encoding="utf-8")
    repo = FoodRepository(path)
    repo.load()
    assert repo.resolve_calories("snack") == 104


def test_food_load_skips_malformed(tmp_path):
    """Test malformed lines are skipped with a warning."""
    path = tmp_path / "foods.txt"
    path.write_text("B|apple|Apple|fruit|52\nB|bad|Bad|x|lots\nX|odd|Odd||1\n",
                    encoding="utf-8")
    repo = FoodRepository(path)
    repo.load()
    assert repo.keys() == ["apple"]
    assert len(repo.load_warnings) == 2


def test_food_load_drops_cyclic_composites(tmp_path):
    """Test composites forming a cycle in the file are dropped."""
    path = tmp_path / "foods.txt"
    path.write_text("C|a|A||b:1\nC|b|B||a:1\nB|apple|Apple||52\n", encoding="utf-8")
    repo = FoodRepository(path)
    repo.load()
    assert "apple" in repo
    assert "a" not in repo or "b" not in repo
    assert repo.load_warnings


def test_food_load_drops_unknown_component(tmp_path):
    """Test composites with missing components are dropped."""
    path = tmp_path / "foods.txt"
    path.write_text("C|salad|Salad||lettuce:1\n", encoding="utf-8")
    repo = FoodRepository(path)
    repo.load()
    assert len(repo) == 0
    assert "lettuce" in repo.load_warnings[0]


def test_seed_only_when_empty():
    """Test seeding fills an empty repository once."""
    repo = FoodRepository()
    added = seed_foods(repo)
    assert added == len(repo) == 26
    assert repo.resolve_calories("pbj_sandwich") == 2 * 80 + 190 + 50
    assert seed_foods(repo) == 0


# Log store
def test_log_append_and_total(logs, foods):
    """Test log totals are resolved from the food database."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    logs.append_entry(DAY, LogEntry("banana", 1.5))
    assert logs.total_calories(DAY, foods.resolve_calories) == pytest.approx(209.5)
    assert logs.total_calories(date(2025, 1, 16), foods.resolve_calories) == 0.0


def test_log_total_follows_food_changes(logs, foods):
    """Test past totals change when a food's calories change."""
    logs.append_entry(DAY, LogEntry("pb_sandwich", 1))
    foods.upsert(BasicFood("bread", "Bread", set(), 100))
    assert logs.total_calories(DAY, foods.resolve_calories) == 390


def test_log_remove_last_entry_drops_date(logs):
    """Test removing the last entry leaves no log for the date."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    logs.remove_entry(DAY, 0)
    assert logs.dates() == []
    assert DAY not in logs


def test_log_upsert_empty_removes(logs):
    """Test storing an empty log removes the date."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    logs.upsert(DailyLog(DAY))
    assert len(logs) == 0


def test_log_remove_bad_index(logs):
    """Test removing a missing index raises NotFound."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    with pytest.raises(NotFound):
        logs.remove_entry(DAY, 5)
    with pytest.raises(NotFound):
        logs.remove_entry(date(2025, 2, 1), 0)


def test_log_insert_keeps_order(logs):
    """Test inserting at an index keeps the other entries in order."""
    for food_id in ("a", "b", "c"):
        logs.append_entry(DAY, LogEntry(food_id, 1))
    removed = logs.remove_entry(DAY, 1)
    logs.insert_entry(DAY, 1, removed)
    assert [e.food_id for e in logs.entries_for(DAY)] == ["a", "b", "c"]


def test_log_references(logs):
    """Test finding entries that use a food."""
    logs.append_entry(DAY, LogEntry("apple", 1))
    logs.append_entry(DAY, LogEntry("banana", 1))
    logs.append_entry(date(2025, 1, 16), LogEntry("apple", 2))
    assert logs.references_to("apple") == [(DAY, 0), (date(2025, 1, 16), 0)]


def test_log_round_trip(tmp_path):
    """Test log entries survive save and load."""
    stamp = datetime(2025, 1, 15, 8, 30, 0)
    repo = LogRepository(tmp_path / "logs.txt")
    repo.append_entry(date(2025, 1, 16), LogEntry("banana", 1.5, stamp))
    repo.append_entry(DAY, LogEntry("apple", 1, stamp))
    repo.save()

    lines = (tmp_path / "logs.txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "2025-01-15|apple|1|2025-01-15T08:30:00"

    loaded = LogRepository(tmp_path / "logs.txt")
    loaded.load()
    assert loaded.dates() == [DAY, date(2025, 1, 16)]
    assert loaded.entries_for(date(2025, 1, 16)) == [LogEntry("banana", 1.5, stamp)]


def test_log_load_skips_bad_servings(tmp_path):
    """Test entries with invalid servings are skipped."""
    path = tmp_path / "logs.txt"
    path.write_text("2025-01-15|apple|0|2025-01-15T08:00:00\n"
                    "2025-01-15|apple|2|2025-01-15T08:00:00\n"
                    "not-a-date|apple|1|\n", encoding="utf-8")
    repo = LogRepository(path)
    repo.load()
    assert len(repo.entries_for(DAY)) == 1
    assert len(repo.load_warnings) == 2


# Profile store
def test_profile_round_trip(tmp_path):
    """Test the user profile and daily profiles survive save and load."""
    repo = ProfileRepository(tmp_path / "profile.txt")
    repo.set_user(UserProfile(Gender.FEMALE, 165, date(1991, 6, 1), "mifflin_st_jeor"))
    repo.upsert(DailyProfile(date(2025, 1, 16), 62.0, ActivityLevel.LIGHTLY_ACTIVE))
    repo.upsert(DailyProfile(DAY, 62.5, ActivityLevel.MODERATELY_ACTIVE))
    repo.save()

    lines = (tmp_path / "profile.txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "PROFILE|F|165|1991-06-01|mifflin_st_jeor"
    assert lines[1] == "DAILY|2025-01-15|62.5|M"

    loaded = ProfileRepository(tmp_path / "profile.txt")
    loaded.load()
    assert loaded.get_user() == repo.get_user()
    assert [d.date for d in loaded.get_all()] == [DAY, date(2025, 1, 16)]
    assert loaded.get(DAY).activity_level is ActivityLevel.MODERATELY_ACTIVE


def test_profile_missing_user(profiles):
    """Test get_user raises NotFound without a profile."""
    assert not profiles.has_user()
    with pytest.raises(NotFound):
        profiles.get_user()


def test_latest_daily(profiles):
    """Test the latest daily profile on or before a date is used."""
    profiles.upsert(DailyProfile(date(2025, 1, 10), 63))
    profiles.upsert(DailyProfile(date(2025, 1, 20), 61))
    assert profiles.latest_daily(date(2025, 1, 15)).weight_kg == 63
    assert profiles.latest_daily(date(2025, 1, 20)).weight_kg == 61
    assert profiles.latest_daily(date(2025, 1, 1)) is None
