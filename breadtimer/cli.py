"""
CLI interface for the Bread Timer scheduling engine.
"""
import click
from pathlib import Path
from typing import Optional, Tuple

from breadtimer.db.database import SessionLocal, create_tables
from breadtimer.errors import BreadTimerError
from breadtimer.models.schemas import RecipeDefinition, StepDefinition, StepType
from breadtimer.services.calendar_service import calendar_filename, export_calendar
from breadtimer.services.recipe_service import RecipeService
from breadtimer.services.schedule_service import ScheduleService


class BreadTimerCLI:
    """CLI application state: one database session for the whole command."""

    def __init__(self):
        create_tables()
        self.db = SessionLocal()
        self.recipe_service = RecipeService(self.db)
        self.schedule_service = ScheduleService(self.db)

    def close(self):
        self.db.close()


def parse_step_option(value: str) -> StepDefinition:
    """
    Parse a --step option of the form "name:hours[:type]".

    Examples:
        "Bulk Fermentation:4:waiting" -> waiting step of 4 hours
        "Mixing:0.5"                  -> active step of 30 minutes
    """
    head, _, last = value.rpartition(":")
    if last in {t.value for t in StepType}:
        value, step_type = head, StepType(last)
    else:
        step_type = StepType.ACTIVE

    name, sep, hours = value.rpartition(":")
    if not sep:
        raise click.BadParameter(f"'{value}' is not in name:hours[:type] form")
    try:
        duration = float(hours)
    except ValueError:
        raise click.BadParameter(f"Duration '{hours}' is not a number")
    if duration < 0:
        raise click.BadParameter(f"Duration '{hours}' must not be negative")
    return StepDefinition(name=name, duration=duration, type=step_type)


def _format_hours(hours: float) -> str:
    return f"{hours:g} hour{'' if hours == 1 else 's'}"


def _format_time(value) -> str:
    return value.strftime("%a %d %b %I:%M %p")


@click.group()
@click.pass_context
def cli(ctx):
    """Bread Timer - work back from when you want your bread ready."""
    ctx.obj = BreadTimerCLI()
    ctx.call_on_close(ctx.obj.close)


@cli.command("list")
@click.pass_obj
def list_recipes(app: BreadTimerCLI):
    """List built-in and custom recipes."""
    for recipe in app.recipe_service.list_recipes():
        origin = "built-in" if recipe.builtin else "custom"
        click.echo(f"{recipe.id:20} {recipe.name:28} {_format_hours(recipe.total_time):>12}  ({origin})")


@cli.command()
@click.argument("recipe_id")
@click.pass_obj
def show(app: BreadTimerCLI, recipe_id: str):
    """Show the steps of a recipe."""
    try:
        recipe = app.recipe_service.get_recipe(recipe_id)
    except BreadTimerError as e:
        raise click.ClickException(e.message)

    click.echo(f"{recipe.name}  (total {_format_hours(recipe.total_time)})")
    click.echo("-" * 60)
    for index, step in enumerate(recipe.steps, start=1):
        click.echo(f"  {index}. {step.name:28} {_format_hours(step.duration):>12}  [{step.type.value}]")


@cli.command()
@click.argument("recipe_id")
@click.option("--at", "target_time", required=True, help="Target completion time, e.g. 2024-01-01T08:00")
@click.pass_obj
def schedule(app: BreadTimerCLI, recipe_id: str, target_time: str):
    """Print when each step must start."""
    try:
        result = app.schedule_service.schedule_for_recipe(recipe_id, target_time)
    except BreadTimerError as e:
        raise click.ClickException(e.message)

    click.echo(f"\n{result.recipe_name}: ready at {_format_time(result.target_time)}")
    click.echo("=" * 60)
    for step in result.steps:
        click.echo(
            f"  {_format_time(step.start_time)} - {_format_time(step.end_time)}  "
            f"{step.name} ({_format_hours(step.duration)})"
        )
    if result.start_time is not None:
        click.echo(f"\nStart at {_format_time(result.start_time)}.")


@cli.command()
@click.argument("recipe_id")
@click.option("--at", "target_time", required=True, help="Target completion time, e.g. 2024-01-01T08:00")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Where to write the .ics file (defaults to <recipe>-schedule.ics)")
@click.pass_obj
def export(app: BreadTimerCLI, recipe_id: str, target_time: str, output: Optional[Path]):
    """Write the schedule to an iCalendar file."""
    try:
        result = app.schedule_service.schedule_for_recipe(recipe_id, target_time)
        ics_bytes = export_calendar(result.recipe_name, result.steps)
    except BreadTimerError as e:
        raise click.ClickException(e.message)

    path = output or Path(calendar_filename(result.recipe_name))
    path.write_bytes(ics_bytes)
    click.echo(f"✓ Wrote {len(result.steps)} events to {path}")


@cli.command()
@click.option("--name", required=True, help="Recipe name")
@click.option("--step", "steps", multiple=True, required=True,
              help='Step as "name:hours[:type]"; repeat in process order')
@click.pass_obj
def add(app: BreadTimerCLI, name: str, steps: Tuple[str, ...]):
    """Create a custom recipe."""
    definition = RecipeDefinition(name=name, steps=[parse_step_option(s) for s in steps])
    try:
        recipe = app.recipe_service.create_recipe(definition)
    except BreadTimerError as e:
        raise click.ClickException(e.message)
    click.echo(f"✓ Saved '{recipe.name}' as {recipe.id} ({_format_hours(recipe.total_time)})")


@cli.command()
@click.argument("recipe_id")
@click.pass_obj
def delete(app: BreadTimerCLI, recipe_id: str):
    """Delete a custom recipe."""
    try:
        app.recipe_service.delete_recipe(recipe_id)
    except BreadTimerError as e:
        raise click.ClickException(e.message)
    click.echo(f"✓ Deleted {recipe_id}")


if __name__ == "__main__":
    cli()
