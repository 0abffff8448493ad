#!/usr/bin/env python3
"""
Demo script for the Bread Timer scheduling engine.
Schedules every built-in recipe for tomorrow morning and prints the
calendar document for one of them.
"""
from datetime import datetime, timedelta

from breadtimer.engine.recipe_catalog import BUILTIN_RECIPES
from breadtimer.engine.schedule_calculator import compute_schedule
from breadtimer.services.calendar_service import export_calendar


def print_section(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def main():
    """Run scheduling demonstration."""
    target = (datetime.now() + timedelta(days=1)).replace(hour=8, minute=0, second=0, microsecond=0)

    for recipe in BUILTIN_RECIPES.values():
        print_section(f"{recipe.name} ready at {target:%a %H:%M}")
        for step in compute_schedule(recipe.steps, target):
            print(f"  {step.start_time:%a %H:%M} - {step.end_time:%a %H:%M}  {step.name:20} [{step.type.value}]")

    baguette = BUILTIN_RECIPES["baguette"]
    print_section("Baguette calendar (.ics)")
    print(export_calendar(baguette.name, compute_schedule(baguette.steps, target)).decode("utf-8"))


if __name__ == "__main__":
    main()
