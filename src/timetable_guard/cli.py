"""CLI entry point for timetable-guard."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .bulk import BulkGenerator
from .config import ConfigLoader, ValidatorConfig
from .conflicts import ConflictDetector
from .exceptions import TimetableError
from .exporters import get_exporter
from .guard import BatchResult, ScheduleMutationGuard
from .loader import (
    export_lessons_json,
    find_schedule,
    load_bulk_spec,
    load_lesson,
    load_schedules,
    load_template,
)
from .models import Lesson, Schedule, ValidationError, ValidationReport

app = typer.Typer(
    name="timetable-guard",
    help="Detect room and teacher conflicts in recurring weekly timetables",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", help="Directory with operating-hours.json / time-slots.csv"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("-v", "--verbose", help="Show detailed output"),
]


def _setup(config_dir: Path | None, verbose: bool) -> ValidatorConfig:
    """Configure logging and load validator settings."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    if config_dir is None:
        return ValidatorConfig()
    return ConfigLoader(config_dir).load()


def _fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _print_errors(errors: list[ValidationError], title: str) -> None:
    """Show errors in a table."""
    table = Table(title=title)
    table.add_column("Type", style="red")
    table.add_column("Lesson", style="cyan")
    table.add_column("Other", style="blue")
    table.add_column("Message")

    for error in errors:
        other = error.other_lesson_id or ""
        if error.other_schedule_id:
            other = f"{other} ({error.other_schedule_id})"
        table.add_row(error.type.value, error.lesson_id, other, error.message)

    console.print(table)


def _print_lessons(lessons: list[Lesson], title: str) -> None:
    """Show lessons in a table."""
    table = Table(title=title)
    table.add_column("Day", style="cyan")
    table.add_column("Time", style="green")
    table.add_column("Week", style="magenta")
    table.add_column("Room", style="yellow")
    table.add_column("Teacher")
    table.add_column("Subject")

    for lesson in lessons:
        week = lesson.week_type.value
        if lesson.week is not None:
            week = f"{week} (#{lesson.week})"
        table.add_row(
            lesson.day_of_week.name.capitalize(),
            f"{lesson.start_time}-{lesson.end_time}",
            week,
            lesson.room,
            lesson.teacher_id or "-",
            lesson.subject_id,
        )

    console.print(table)


def _print_batch(result: BatchResult) -> None:
    console.print(f"  Accepted: {len(result.accepted)}")
    console.print(f"  Rejected: {len(result.rejected)}")
    for lesson in result.rejected:
        for error in result.errors[lesson.id]:
            console.print(
                f"  [red]• {lesson.day_of_week.name.capitalize()} "
                f"{lesson.start_time}-{lesson.end_time}: {error.message}[/red]"
            )


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="JSON file with schedules", exists=True, readable=True),
    ],
    schedule_id: Annotated[
        Optional[str],
        typer.Option("-s", "--schedule", help="Validate only this schedule"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    config_dir: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate schedules against themselves and each other."""
    try:
        config = _setup(config_dir, verbose)
        schedules = load_schedules(input_file)
        targets = [find_schedule(schedules, schedule_id)] if schedule_id else schedules
    except TimetableError as e:
        _fail(str(e))

    detector = ConflictDetector(config)
    with console.status("[bold green]Validating schedules..."):
        reports = [detector.report(target, schedules) for target in targets]

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")
    for report in reports:
        if report.is_valid:
            console.print(
                f"  [green]✓ {report.schedule_id}[/green] ({report.lessons_checked} lessons)"
            )
        else:
            console.print(
                f"  [red]✗ {report.schedule_id}[/red] ({report.lessons_checked} lessons, "
                f"{len(report.errors)} errors)"
            )
            if verbose:
                _print_errors(report.errors, f"Errors in {report.schedule_id}")

    if output:
        exporter = get_exporter(format.value)
        if format == OutputFormat.csv:
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            suffix = ".xlsx" if format == OutputFormat.excel else ".json"
            output_path = output if output.suffix else output.with_suffix(suffix)

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(reports, output_path)
        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")

    if not all(report.is_valid for report in reports):
        raise typer.Exit(1)


@app.command("check-lesson")
def check_lesson(
    input_file: Annotated[
        Path,
        typer.Argument(help="JSON file with schedules", exists=True, readable=True),
    ],
    schedule_id: Annotated[
        str,
        typer.Option("-s", "--schedule", help="Schedule the lesson is added to"),
    ],
    lesson_file: Annotated[
        Path,
        typer.Option("-l", "--lesson", help="JSON file with the new lesson", exists=True),
    ],
    replace_id: Annotated[
        Optional[str],
        typer.Option("--replace", help="Id of the lesson being edited"),
    ] = None,
    config_dir: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Check whether a lesson can be added to (or replace one in) a schedule."""
    try:
        config = _setup(config_dir, verbose)
        schedules = load_schedules(input_file)
        schedule = find_schedule(schedules, schedule_id)
        candidate = load_lesson(lesson_file)

        guard = ScheduleMutationGuard(config)
        if replace_id:
            errors = guard.can_replace_lesson(replace_id, candidate, schedule, schedules)
        else:
            errors = guard.can_add_lesson(candidate, schedule, schedules)
    except TimetableError as e:
        _fail(str(e))

    if not errors:
        console.print(f"[bold green]✓ Lesson can be saved to {schedule.id}[/bold green]")
        return

    _print_errors(errors, f"Cannot save lesson to {schedule.id}")
    raise typer.Exit(1)


def _filter_against(
    lessons: list[Lesson],
    schedules_file: Path | None,
    schedule_id: str | None,
    config: ValidatorConfig,
    group_id: str = "",
    semester_id: str = "",
) -> tuple[list[Lesson], BatchResult | None]:
    """Run candidates through the guard when a schedules file is given."""
    if schedules_file is None:
        return lessons, None

    schedules = load_schedules(schedules_file)
    if schedule_id:
        schedule = find_schedule(schedules, schedule_id)
    else:
        schedule = next(
            (
                s
                for s in schedules
                if (s.group_id, s.semester_id) == (group_id, semester_id)
            ),
            Schedule(id=f"{semester_id}_{group_id}", group_id=group_id, semester_id=semester_id),
        )

    result = ScheduleMutationGuard(config).can_add_lessons(lessons, schedule, schedules)
    return result.accepted, result


@app.command()
def expand(
    spec_file: Annotated[
        Path,
        typer.Argument(help="JSON file with the bulk lesson spec", exists=True, readable=True),
    ],
    schedules_file: Annotated[
        Optional[Path],
        typer.Option("--schedules", help="Existing schedules to check the lessons against"),
    ] = None,
    schedule_id: Annotated[
        Optional[str],
        typer.Option("-s", "--schedule", help="Schedule the lessons are added to"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output JSON file for accepted lessons"),
    ] = None,
    config_dir: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Expand a bulk spec into lessons, optionally checking them for conflicts."""
    try:
        config = _setup(config_dir, verbose)
        spec = load_bulk_spec(spec_file)
        lessons = BulkGenerator(config).expand(spec)
        accepted, batch = _filter_against(
            lessons, schedules_file, schedule_id, config, spec.group_id, spec.semester_id
        )
    except TimetableError as e:
        _fail(str(e))

    console.print(f"\n[bold]Generated {len(lessons)} lesson(s)[/bold]")
    if verbose:
        _print_lessons(lessons, "Generated lessons")
    if batch is not None:
        _print_batch(batch)

    if output:
        export_lessons_json(accepted, output)
        console.print(f"\n[bold green]✓[/bold green] Lessons exported to: {output}")

    if batch is not None and not batch.all_accepted:
        raise typer.Exit(1)


@app.command("apply-template")
def apply_template(
    template_file: Annotated[
        Path,
        typer.Argument(help="JSON file with the schedule template", exists=True, readable=True),
    ],
    group_id: Annotated[str, typer.Option("-g", "--group", help="Target group id")],
    semester_id: Annotated[str, typer.Option("--semester", help="Target semester id")],
    schedules_file: Annotated[
        Optional[Path],
        typer.Option("--schedules", help="Existing schedules to check the lessons against"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output JSON file for accepted lessons"),
    ] = None,
    config_dir: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Apply a schedule template to a group, optionally checking for conflicts."""
    try:
        config = _setup(config_dir, verbose)
        template = load_template(template_file)
        lessons = BulkGenerator(config).apply_template(template, group_id, semester_id)
        accepted, batch = _filter_against(
            lessons, schedules_file, None, config, group_id, semester_id
        )
    except TimetableError as e:
        _fail(str(e))

    console.print(
        f"\n[bold]Template '{template.name}':[/bold] {len(lessons)} of "
        f"{len(template.lessons)} lesson(s) prepared"
    )
    if verbose:
        _print_lessons(lessons, f"Lessons for {group_id}")
    if batch is not None:
        _print_batch(batch)

    if output:
        export_lessons_json(accepted, output)
        console.print(f"\n[bold green]✓[/bold green] Lessons exported to: {output}")

    if batch is not None and not batch.all_accepted:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
