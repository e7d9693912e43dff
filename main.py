"""
YADA Diet Tracker - Main Entry Point

Interactive calorie tracker with composite foods, undo and daily targets.
"""
import atexit
import traceback

import config
from diet_tracker.commands import CommandContext, dispatch


def print_welcome(ctx: CommandContext):
    """Print welcome message."""
    print("=" * 70)
    print("  YADA - Yet Another Diet Assistant")
    print("  Type 'help' for commands, 'quit' to exit")
    print("=" * 70)
    if config.MODE == "DEVELOPMENT":
        print(f"Running in DEVELOPMENT mode - data in {config.DATA_PATH}")
    print(f"Working date: {ctx.date_label()}")
    print()


def create_context() -> CommandContext:
    """Build the command context from configuration."""
    config.ensure_data_path()
    return CommandContext(
        foods_file=config.FOODS_FILE,
        logs_file=config.LOGS_FILE,
        profile_file=config.PROFILE_FILE,
        max_history=config.UNDO_HISTORY_SIZE,
        default_method=config.DEFAULT_CALCULATION_METHOD,
        chart_output_file=config.CHART_OUTPUT_FILE,
        personal_docs_dir=config.PERSONAL_DOCS_DIR,
        chart_days=config.DEFAULT_CHART_DAYS,
        seed=config.SEED_STARTER_FOODS,
    )


def repl():
    """
    Main Read-Eval-Print Loop.

    Handles user input and dispatches to registered commands.
    """
    ctx = create_context()

    for warning in ctx.load_warnings:
        print(f"Warning: {warning}")
    if ctx.seeded:
        print(f"Food database was empty; added {ctx.seeded} starter foods.")

    print_welcome(ctx)

    if not ctx.profile.has_user():
        print("No profile yet. Create one to get calorie targets:")
        print("  profile init gender=F height=165 birth=1990-01-01\n")

    # Register auto-save on exit
    def save_on_exit():
        """Save all data before program exits."""
        try:
            ctx.save_all()
        except OSError as e:
            print(f"Could not save data: {e}")

    atexit.register(save_on_exit)

    # Main loop
    while True:
        try:
            user_input = input(f"[{ctx.current_date}]> ").strip()

            if not user_input:
                continue

            try:
                handled, cmd_name = dispatch(ctx, user_input)
                if not handled:
                    print(f"Unknown command: '{cmd_name}'. Type 'help' for available commands.")

            except SystemExit:
                # Quit command raises SystemExit
                raise
            except Exception as e:
                print(f"Error executing command: {e}")
                # In development mode, show full traceback
                if config.MODE == "DEVELOPMENT":
                    traceback.print_exc()

        except (KeyboardInterrupt, EOFError):
            # Ctrl+C or Ctrl+D
            print("\nGoodbye!")
            break
        except SystemExit:
            # Quit command
            break


def main():
    """Main entry point."""
    try:
        repl()
    except KeyboardInterrupt:
        print("\nInterrupted. Goodbye!")
    except Exception as e:
        print(f"Fatal error: {e}")
        if config.MODE == "DEVELOPMENT":
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
