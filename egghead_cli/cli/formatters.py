"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from egghead_cli.models.catalog import Technology, count_courses, count_lessons
from egghead_cli.models.config import DownloadConfig
from egghead_cli.models.stats import DownloadStats
from egghead_cli.utils.formatting import format_duration, format_size, pluralize


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "CsrfTokenMissing": [
            "• egghead.io may have changed its sign-in page.",
            "• Check that https://egghead.io/users/sign_in opens in a browser.",
        ],
        "AuthenticationRejected": [
            "• Verify your email and password with `egghead-cli config`.",
            "• Check your membership status on egghead.io.",
        ],
        "NotAuthenticated": [
            "• Sign-in did not complete. Run the command again.",
        ],
        "TechnologyNotFound": [
            "• Technology names are matched case-insensitively as substrings.",
            "• Run `egghead-cli list` to see the available technologies.",
        ],
        "CourseNotFound": [
            "• Course names are matched case-insensitively as substrings.",
            "• Run `egghead-cli list` to see the available courses.",
        ],
        "FilterAmbiguous": [
            "• Use either --technology or --course, not both.",
        ],
        "RetrievalError": [
            "• The course listing or a course feed could not be retrieved.",
            "• Check your internet connection and try again in a few minutes.",
        ],
        "TransferError": [
            "• A network or disk issue stopped the download.",
            "• Run the command again: complete lessons are skipped and partial "
            "files are downloaded again.",
        ],
        "ConfigurationError": [
            "• Review your settings with `egghead-cli config`.",
        ],
        "ClientResponseError": [
            "• egghead.io returned an error response.",
            "• Please try again in a few minutes.",
        ],
        "ClientError": [
            "• Could not reach egghead.io. Check your internet connection.",
        ],
        "TimeoutError": [
            "• egghead.io did not answer in time. Check your internet connection.",
        ],
    }

    # Subclasses without their own entry fall back to their family's advice.
    suggestions = next(
        (
            suggestions_map[cls.__name__]
            for cls in type(error).__mro__
            if cls.__name__ in suggestions_map
        ),
        ["• Run the command with -vv for detailed logs."],
    )

    content = Table.grid(padding=(0, 0))
    content.add_row(Text.assemble((f"{error_type}: ", "bold red"), error_msg))
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        details = Table(show_header=False, box=None, padding=(0, 1))
        details.add_column(style="dim cyan")
        details.add_column(style="dim")
        for key, value in context.items():
            details.add_row(f"{key}:", escape(str(value)))
        content.add_row()
        content.add_row(details)

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config: DownloadConfig, console: Console):
    """Displays the current settings, hiding the password."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Email:", escape(config.email) or "[dim]not set[/dim]")
    table.add_row("Password:", "********" if config.password else "[dim]not set[/dim]")
    table.add_row(
        "Download Path:", escape(config.download_path) or "[dim]not set[/dim]"
    )
    table.add_row("Probe Workers:", str(config.probe_workers))

    console.print(
        Panel(
            table,
            title=f"Settings ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
            expand=False,
        )
    )


def print_catalog(technologies: Sequence[Technology], console: Console):
    """Displays the course listing: technologies, their courses and lesson counts."""
    console.print(
        "Course Listing: "
        f"[yellow]{pluralize(count_lessons(technologies), 'lesson')} over "
        f"{pluralize(count_courses(technologies), 'course')} over "
        f"{pluralize(len(technologies), 'technology', 'technologies')}[/yellow]"
    )
    console.print()
    for technology in technologies:
        console.print(
            f"[bold]{escape(technology.name)}[/bold]"
            f"[yellow] ({pluralize(len(technology.courses), 'course')})[/yellow]"
        )
        for course in technology.courses:
            console.print(
                f" • {escape(course.name)}"
                f"[yellow] ({pluralize(course.lesson_count, 'lesson')})[/yellow]"
            )
        console.print()


def print_matching_courses(technologies: Sequence[Technology], console: Console):
    """Displays the enriched courses about to be downloaded, with their sizes."""
    console.print(f"Found {pluralize(count_courses(technologies), 'matching course')}")
    console.print()

    total_size = 0
    for technology in technologies:
        if not technology.courses:
            continue
        technology_size = sum(course.total_size for course in technology.courses)
        total_size += technology_size
        console.print(
            f"[bold]{escape(technology.name)}[/bold][yellow] "
            f"({pluralize(len(technology.courses), 'course')}, "
            f"{format_size(technology_size)})[/yellow]"
        )
        for course in technology.courses:
            console.print(
                f" • {escape(course.name)}[yellow] "
                f"({pluralize(len(course.lessons), 'lesson')}, "
                f"{format_size(course.total_size)})[/yellow]"
            )
        console.print()

    console.print(f"Total Download Size: [yellow]{format_size(total_size)}[/yellow]")


def print_summary_panel(
    stats: DownloadStats, console: Console, total_tasks: int | None = None
):
    """Displays the final summary of the transfer pass."""
    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    processed = str(stats.lessons_processed)
    if total_tasks is not None:
        processed = f"{processed} of {total_tasks}"
    stats_table.add_row("Processed:", processed)
    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.lessons_downloaded}[/bold green]"
    )
    if stats.lessons_skipped_exists > 0:
        stats_table.add_row(
            "○ Skipped:", f"[yellow]{stats.lessons_skipped_exists} (exists)[/yellow]"
        )
    if stats.lessons_unavailable > 0:
        stats_table.add_row(
            "⚠ Unavailable:", f"[yellow]{stats.lessons_unavailable}[/yellow]"
        )
    if stats.lessons_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.lessons_failed}[/bold red]")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "Courses Updated:", pluralize(len(stats.courses_processed), "course")
    )
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row(
        "Avg. Speed:",
        f"[magenta]{format_size(int(stats.average_speed_bps))}/s[/magenta]",
    )
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(stats.elapsed_seconds)}[/blue]"
    )

    if stats.lessons_failed:
        title = "✗ [bold]Downloads Stopped[/bold]"
        border_color = "red"
    elif not stats.finished:
        title = "⚠ [bold]Downloads Interrupted[/bold]"
        border_color = "yellow"
    else:
        title = "✔ [bold]Downloads Finished Successfully[/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
