"""
Food database commands: list, inspect, search, add and edit foods.
"""
from typing import List

from diet_tracker.errors import UnknownFood, ValidationError
from diet_tracker.history import AddComponentCommand, AddFoodCommand, UpdateFoodCommand
from diet_tracker.models import BasicFood, Component, CompositeFood, Food, MatchMode

from .base import Command, register_command


def format_food_line(food: Food, calories: float) -> str:
    """One-line listing of a food."""
    kind = "C" if food.is_composite else "B"
    keywords = ", ".join(sorted(food.keywords))
    return f"  {food.id:>16} | {kind} | {calories:>7.1f} cal | {food.name} [{keywords}]"


def _parse_keywords(text) -> List[str]:
    return [k for k in (text or "").split(",") if k.strip()]


@register_command
class FoodsCommand(Command):
    """List the food database."""

    name = ("foods", "ls")
    help_text = "List foods (foods [basic|composite])"

    def execute(self, args: str) -> None:
        """
        List foods in insertion order.

        Args:
            args: Optional filter: "basic" or "composite"
        """
        kind = args.strip().lower()
        if kind not in ("", "basic", "composite"):
            print("Usage: foods [basic|composite]")
            return

        foods = self.ctx.foods.get_all()
        if kind:
            foods = [f for f in foods if f.is_composite == (kind == "composite")]

        if not foods:
            print("\nNo foods.\n")
            return

        print(f"\n{len(foods)} food(s):")
        for food in foods:
            print(format_food_line(food, self.ctx.foods.resolve_calories(food.id)))
        print()


@register_command
class FoodCommand(Command):
    """Show one food with its component tree."""

    name = "food"
    help_text = "Show food details and component breakdown (food <id>)"

    def execute(self, args: str) -> None:
        """Display a food."""
        food_id = args.strip()
        if not food_id:
            print("Usage: food <id>")
            return
        if food_id not in self.ctx.foods:
            raise UnknownFood(food_id)

        food = self.ctx.foods.get(food_id)
        calories = self.ctx.foods.resolve_calories(food_id)
        print(f"\n{food.name} ({food.id})")
        print(f"  Type: {'composite' if food.is_composite else 'basic'}")
        print(f"  Keywords: {', '.join(sorted(food.keywords)) or '(none)'}")
        print(f"  Calories per serving: {calories:.1f}")

        if food.is_composite:
            print("  Components:")
            self._print_tree(food, indent=4)

        users = self.ctx.foods.dependents_of(food_id)
        if users:
            print(f"  Used in: {', '.join(users)}")
        print()

    def _print_tree(self, food: CompositeFood, indent: int) -> None:
        for component in food.components:
            child = self.ctx.foods.get(component.food_id)
            per = self.ctx.foods.resolve_calories(child.id)
            print(f"{' ' * indent}{component.servings:g} x {child.name} ({child.id}) "
                  f"= {per * component.servings:.1f} cal")
            if child.is_composite:
                self._print_tree(child, indent + 4)


@register_command
class SearchCommand(Command):
    """Search foods by keyword."""

    name = ("search", "find", "f")
    help_text = "Search foods by keyword (search fruit sweet [--all])"

    def execute(self, args: str) -> None:
        """
        Search foods by exact keyword tokens.

        Args:
            args: Keywords, plus --all to require every keyword (default: any)
        """
        parts = self._split(args)
        match_all = self._pop_flag(parts, "--all", "-a")
        self._pop_flag(parts, "--any")
        if not parts:
            print("Usage: search <keyword> [keyword ...] [--all]")
            return

        mode = MatchMode.ALL if match_all else MatchMode.ANY
        results = list(self.ctx.foods.search(parts, mode))

        query = " ".join(parts)
        if not results:
            print(f"\nNo foods match '{query}' ({mode.value}).\n")
            return

        print(f"\nFoods matching {mode.value.upper()} of '{query}':")
        for food in results:
            print(format_food_line(food, self.ctx.foods.resolve_calories(food.id)))
        print()


@register_command
class AddFoodCommandHandler(Command):
    """Add a basic food."""

    name = "addfood"
    help_text = 'Add basic food (addfood <id> "<name>" <calories> [--kw a,b] [--overwrite])'

    def execute(self, args: str) -> None:
        """
        Add a basic food.

        Examples:
            addfood kiwi "Kiwi (medium)" 42 --kw kiwi,fruit
            addfood apple "Apple (large)" 116 --overwrite
        """
        parts = self._split(args)
        overwrite = self._pop_flag(parts, "--overwrite", "-o")
        keywords = _parse_keywords(self._pop_option(parts, "--kw", "-k"))
        if len(parts) != 3:
            print('Usage: addfood <id> "<name>" <calories> [--kw a,b] [--overwrite]')
            return

        food_id, name, calories = parts
        food = BasicFood(food_id, name, set(keywords),
                         self._parse_float(calories, "Calories"))
        self.ctx.run(AddFoodCommand(self.ctx.foods, food, overwrite=overwrite,
                                    log_repo=self.ctx.logs))


@register_command
class CompositeCommand(Command):
    """Create a composite food from existing foods."""

    name = ("composite", "recipe")
    help_text = 'Create composite food (composite <id> "<name>" a:2 b:1 [--kw x,y] [--overwrite])'

    def execute(self, args: str) -> None:
        """
        Create a composite food in one step.

        Every component is validated before anything is changed, so a
        bad component leaves the database and the undo history untouched.

        Examples:
            composite pbj "PB&J Sandwich" pb_sandwich:1 jelly:1 --kw sandwich,lunch
        """
        parts = self._split(args)
        overwrite = self._pop_flag(parts, "--overwrite", "-o")
        keywords = _parse_keywords(self._pop_option(parts, "--kw", "-k"))
        if len(parts) < 3:
            print('Usage: composite <id> "<name>" <food:servings> [<food:servings> ...] '
                  '[--kw a,b] [--overwrite]')
            return

        food_id, name, specs = parts[0], parts[1], parts[2:]
        components = []
        for spec in specs:
            comp_id, sep, servings = spec.rpartition(":")
            if not sep:
                comp_id, servings = spec, "1"
            if comp_id not in self.ctx.foods:
                raise UnknownFood(comp_id)
            components.append(Component(comp_id, servings))

        food = CompositeFood(food_id, name, set(keywords), components)
        self.ctx.run(AddFoodCommand(self.ctx.foods, food, overwrite=overwrite,
                                    log_repo=self.ctx.logs))


@register_command
class ComponentCommand(Command):
    """Add a component to an existing composite food."""

    name = ("component", "addcomp")
    help_text = "Add component to composite (component <composite> <food> [servings])"

    def execute(self, args: str) -> None:
        """Append a component."""
        parts = self._split(args)
        if len(parts) not in (2, 3):
            print("Usage: component <composite_id> <food_id> [servings]")
            return

        servings = self._parse_float(parts[2], "Servings") if len(parts) == 3 else 1.0
        self.ctx.run(AddComponentCommand(self.ctx.foods, parts[0], parts[1], servings))


@register_command
class SetCaloriesCommand(Command):
    """Change calories of a basic food."""

    name = "setcal"
    help_text = "Change calories of a basic food (setcal <id> <calories>)"

    def execute(self, args: str) -> None:
        """
        Change a basic food's calories.

        Composites using the food and past log totals change with it.
        """
        parts = self._split(args)
        if len(parts) != 2:
            print("Usage: setcal <id> <calories>")
            return

        food_id, calories = parts
        if food_id not in self.ctx.foods:
            raise UnknownFood(food_id)
        current = self.ctx.foods.get(food_id)
        if current.is_composite:
            raise ValidationError(
                f"'{food_id}' is composite; its calories come from its components"
            )

        updated = BasicFood(current.id, current.name, set(current.keywords),
                            self._parse_float(calories, "Calories"))
        self.ctx.run(UpdateFoodCommand(self.ctx.foods, updated))

        users = self.ctx.foods.dependents_of(food_id)
        if users:
            print(f"Also affects: {', '.join(users)}")
