"""
Tests for REPL commands.
"""
from datetime import date

import pytest

from diet_tracker.commands import CommandContext, dispatch, get_registry
from diet_tracker.errors import NothingToUndo, UnknownFood, ValidationError

DAY = date(2025, 1, 15)


@pytest.fixture
def ctx():
    """In-memory context with the starter foods, working on a fixed date."""
    context = CommandContext(seed=True)
    context.current_date = DAY
    return context


def run(ctx, line):
    handled, _ = dispatch(ctx, line)
    assert handled
    return ctx


def test_registry_has_core_commands():
    """Test every command is registered under its canonical name."""
    commands = get_registry().get_all_commands()
    names = [c.name if isinstance(c.name, str) else c.name[0] for c in commands]
    assert names == sorted(names)
    for name in ("help", "quit", "save", "foods", "food", "search", "addfood", "composite",
                 "component", "setcal", "log", "show", "delete", "date", "profile",
                 "weigh", "method", "stats", "undo", "history", "chart", "explain"):
        assert name in names


def test_unknown_command(ctx):
    """Test unknown commands are reported as unhandled."""
    assert dispatch(ctx, "frobnicate now") == (False, "frobnicate")


def test_alias_returns_canonical_name(ctx):
    """Test aliases resolve to the first command name."""
    assert dispatch(ctx, "ls") == (True, "foods")


def test_seeded_context(ctx):
    """Test the starter foods are seeded into an empty store."""
    assert ctx.seeded == 26
    assert ctx.foods.resolve_calories("pbj_sandwich") == 400


def test_help(ctx, capsys):
    """Test help lists commands and the working date."""
    run(ctx, "help")
    out = capsys.readouterr().out
    assert "undo, u" in out
    assert "Working date: 2025-01-15" in out


def test_log_show_undo(ctx, capsys):
    """Test logging, showing and undoing an entry."""
    run(ctx, "log apple")
    run(ctx, "log banana 1.5")
    out = capsys.readouterr().out
    assert "Logged 1.5 serving(s) of 'banana' on 2025-01-15 (157.5 cal)" in out

    run(ctx, "show")
    out = capsys.readouterr().out
    assert "Total: 252.5 cal" in out

    run(ctx, "undo")
    out = capsys.readouterr().out
    assert "Undoing: Add log entry: 1.5 servings of banana on 2025-01-15" in out
    assert "Undone. 1 change(s) left to undo." in out
    assert len(ctx.logs.entries_for(DAY)) == 1


def test_log_unknown_food_suggests(ctx, capsys):
    """Test an unknown food id suggests keyword matches."""
    with pytest.raises(UnknownFood):
        run(ctx, "log fruit")
    assert "Did you mean: apple, banana" in capsys.readouterr().out
    assert ctx.manager.depth == 0


def test_delete_and_undo(ctx):
    """Test deleting by displayed number and undoing."""
    run(ctx, "log apple")
    run(ctx, "log soda")
    run(ctx, "delete 1")
    assert [e.food_id for e in ctx.logs.entries_for(DAY)] == ["soda"]
    run(ctx, "undo")
    assert [e.food_id for e in ctx.logs.entries_for(DAY)] == ["apple", "soda"]


def test_undo_nothing(ctx):
    """Test undo with empty history raises NothingToUndo."""
    with pytest.raises(NothingToUndo):
        run(ctx, "undo")


def test_date_relative(ctx, capsys):
    """Test moving the working date."""
    run(ctx, "date -1")
    assert ctx.current_date == date(2025, 1, 14)
    assert "2025-01-14" in capsys.readouterr().out


def test_addfood_and_composite(ctx, capsys):
    """Test adding a basic food and a composite using it."""
    run(ctx, 'addfood kiwi "Kiwi (medium)" 42 --kw kiwi,fruit')
    run(ctx, 'composite fruit_bowl "Fruit Bowl" kiwi:2 banana --kw fruit,bowl')
    assert ctx.foods.resolve_calories("fruit_bowl") == 189

    run(ctx, "food fruit_bowl")
    out = capsys.readouterr().out
    assert "2 x Kiwi (medium) (kiwi) = 84.0 cal" in out
    assert ctx.manager.depth == 2


def test_composite_unknown_component(ctx):
    """Test a composite with an unknown component is not created."""
    with pytest.raises(UnknownFood):
        run(ctx, 'composite bowl "Bowl" kiwi:2')
    assert "bowl" not in ctx.foods
    assert ctx.manager.depth == 0


def test_component_cycle_rejected(ctx):
    """Test adding a containing composite as a component fails."""
    with pytest.raises(ValidationError):
        run(ctx, "component pb_sandwich pbj_sandwich")


def test_setcal_propagates(ctx, capsys):
    """Test changing a basic food reports affected composites."""
    run(ctx, "setcal jelly 60")
    out = capsys.readouterr().out
    assert "Updated food 'jelly' (50 -> 60 cal/serving)" in out
    assert "Also affects: pbj_sandwich" in out
    assert ctx.foods.resolve_calories("pbj_sandwich") == 410


def test_search_all(ctx, capsys):
    """Test keyword search with ALL semantics."""
    run(ctx, "search fruit sweet --all")
    out = capsys.readouterr().out
    assert "banana" in out
    assert "apple" not in out


def test_profile_weigh_stats(ctx, capsys):
    """Test the full profile flow produces a target."""
    run(ctx, "profile init gender=F height=165 birth=1991-06-01 method=mifflin_st_jeor")
    run(ctx, "weigh 62.5 moderate")
    run(ctx, "log banana 2")
    capsys.readouterr()

    run(ctx, "stats")
    out = capsys.readouterr().out
    assert "BMR: 1330.2" in out
    assert "Target: 2061.9" in out
    assert "Consumed: 210.0" in out


def test_profile_init_missing_fields(ctx):
    """Test profile init needs gender, height and birth date."""
    with pytest.raises(ValidationError):
        run(ctx, "profile init gender=F")
    assert not ctx.profile.has_user()


def test_method_switch_and_undo(ctx):
    """Test switching the calculation method is undoable."""
    run(ctx, "profile init gender=M height=180 birth=1980-01-01")
    run(ctx, "method mifflin_st_jeor")
    assert ctx.profile.get_user().calculation_method == "mifflin_st_jeor"
    run(ctx, "undo")
    assert ctx.profile.get_user().calculation_method == "harris_benedict"


def test_eviction_notice(capsys):
    """Test the REPL reports commands that fall off the undo history."""
    context = CommandContext(max_history=1)
    context.current_date = DAY
    run(context, "log apple")
    run(context, "log banana")
    out = capsys.readouterr().out
    assert "(History full: 'Add log entry: 1 servings of apple on 2025-01-15'" in out


def test_history_listing(ctx, capsys):
    """Test history lists undoable changes."""
    run(ctx, "log apple")
    run(ctx, "history")
    assert "Undo history (1/20)" in capsys.readouterr().out


def test_explain_lists_topics(ctx, capsys):
    """Test explain without a topic lists the shipped topics."""
    run(ctx, "explain")
    out = capsys.readouterr().out
    assert "undo" in out
    assert "composite" in out


def test_save_and_reload(tmp_path):
    """Test data saved by one session is loaded by the next."""
    files = dict(foods_file=tmp_path / "foods.txt", logs_file=tmp_path / "logs.txt",
                 profile_file=tmp_path / "profile.txt")
    first = CommandContext(**files)
    first.current_date = DAY
    run(first, 'addfood kiwi "Kiwi" 42')
    run(first, "log kiwi 2")
    run(first, "save")

    second = CommandContext(**files)
    assert second.seeded == 0
    assert second.foods.resolve_calories("kiwi") == 42
    assert second.logs.total_calories(DAY, second.foods.resolve_calories) == 84
    assert second.manager.depth == 0


def test_quit(ctx):
    """Test quit exits."""
    with pytest.raises(SystemExit):
        run(ctx, "quit")


def test_addfood_rejects_nan_calories(ctx):
    """Test non-finite calories typed at the prompt are rejected."""
    with pytest.raises(ValidationError):
        run(ctx, 'addfood x "X" nan')
    assert "x" not in ctx.foods
    assert ctx.manager.depth == 0


def test_profile_init_future_birth_date(ctx):
    """Test profile init refuses a birth date in the future."""
    with pytest.raises(ValidationError):
        run(ctx, "profile init gender=F height=165 birth=2099-01-01")
    assert not ctx.profile.has_user()


def test_weigh_first_entry_without_activity(ctx, capsys):
    """Test the first weigh-in may omit the activity level."""
    run(ctx, "weigh 60")
    assert "Recorded 2025-01-15: 60 kg, Sedentary" in capsys.readouterr().out


def test_log_entry_for_dropped_composite(tmp_path, capsys):
    """Test a log entry whose composite was dropped at load stays visible and deletable."""
    files = dict(foods_file=tmp_path / "foods.txt", logs_file=tmp_path / "logs.txt",
                 profile_file=tmp_path / "profile.txt")
    files["foods_file"].write_text("C|combo|Combo||ghost:1\nB|apple|Apple|fruit|52\n",
                                   encoding="utf-8")
    files["logs_file"].write_text(
        "2025-01-15|combo|1|2025-01-15T08:00:00\n"
        "2025-01-15|apple|1|2025-01-15T09:00:00\n",
        encoding="utf-8",
    )

    context = CommandContext(seed=False, **files)
    context.current_date = DAY
    assert any("Dropped composite food 'combo'" in w for w in context.load_warnings)
    assert any("Log entry #1 on 2025-01-15 refers to unknown food 'combo'" in w
               for w in context.load_warnings)

    run(context, "show")
    out = capsys.readouterr().out
    assert "1 x <unknown food> (combo)" in out
    assert "1 x Apple (apple) = 52.0 cal" in out
    assert "Total: 52.0 cal (excluding 1 unknown food entries)" in out

    run(context, "delete 1")
    assert [e.food_id for e in context.logs.entries_for(DAY)] == ["apple"]
    assert context.logs.total_calories(DAY, context.foods.resolve_calories) == 52
