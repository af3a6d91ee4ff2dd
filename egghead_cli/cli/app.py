"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from egghead_cli import __version__
from egghead_cli.api import CatalogService, EggheadClient, SessionAuthenticator
from egghead_cli.core.catalog_filter import CatalogFilter, apply_filter
from egghead_cli.core.download_manager import DownloadScheduler
from egghead_cli.exceptions import EggheadCliError
from egghead_cli.models.catalog import count_courses, count_lessons
from egghead_cli.models.config import DownloadConfig
from egghead_cli.models.session import Credentials, Session
from egghead_cli.storage.config_manager import ConfigManager

from .formatters import (
    print_catalog,
    print_config,
    print_matching_courses,
    print_summary_panel,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("egghead_cli")

app = typer.Typer(
    name="egghead-cli",
    help=(
        "Download egghead.io courses. Use 'egghead-cli <command> --help' for more"
        " info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "egghead-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """egghead.io Downloader CLI"""
    if version:
        console.print(f"[bold]egghead-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("egghead_cli").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="config")
def config_command(
    email: str | None = typer.Option(None, "-e", "--email", help="Account email."),
    password: str | None = typer.Option(
        None, "-p", "--password", help="Account password."
    ),
    download_path: str | None = typer.Option(
        None, "-d", "--download-path", help="Directory lessons are saved to."
    ),
    probe_workers: int | None = typer.Option(
        None,
        "-w",
        "--probe-workers",
        help="Simultaneous file size checks (default 10).",
    ),
):
    """Show or update the settings."""
    config_manager = ConfigManager(CONFIG_FILE)
    updates = {
        "email": email,
        "password": password,
        "download_path": download_path,
        "probe_workers": probe_workers,
    }
    try:
        if all(value is None for value in updates.values()):
            print_config(CONFIG_FILE, config_manager.load_config(), console)
            return
        config = config_manager.update_config(updates)
    except EggheadCliError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✓ Settings updated.[/green]")
    print_config(CONFIG_FILE, config, console)


async def _authenticate(client: EggheadClient, config: DownloadConfig) -> Session:
    with console.status("[yellow]Authenticating...[/yellow]"):
        session = await SessionAuthenticator(client).authenticate(
            Credentials(email=config.email, password=config.password)
        )
    console.print("[green]✔[/green] Authenticated")
    return session


async def _list_catalog(session: Session):
    with console.status("[yellow]Retrieving course listing...[/yellow]") as status:

        def on_progress(processed: int, total: int) -> None:
            status.update(
                f"[yellow]Retrieving course listing ({processed}/{total})...[/yellow]"
            )

        technologies = await CatalogService().list_catalog(session, on_progress)
    console.print("[green]✔[/green] Retrieved course listing")
    return technologies


@app.command(name="list")
def list_command():
    """List all technologies and courses."""
    config = ConfigManager(CONFIG_FILE).load_config()
    config.require_credentials()

    async def _list_async():
        async with EggheadClient(config.probe_workers) as client:
            session = await _authenticate(client, config)
            technologies = await _list_catalog(session)
        console.print()
        print_catalog(technologies, console)

    asyncio.run(_list_async())


@app.command(name="download")
def download_command(
    technology: str | None = typer.Option(
        None, "-t", "--technology", help="Download every course of a technology."
    ),
    course: str | None = typer.Option(
        None, "-c", "--course", help="Download the courses whose name matches."
    ),
    overwrite: bool = typer.Option(
        False, "-o", "--overwrite", help="Download lessons again even if complete."
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", "-n", "--no-verify", help="Do not ask for confirmation."
    ),
):
    """Download course(s)."""
    catalog_filter = CatalogFilter.from_options(technology, course)

    config = ConfigManager(CONFIG_FILE).load_config()
    config.require_credentials()
    config.require_download_path()
    download_path = Path(config.download_path)

    async def _download_async():
        async with EggheadClient(config.probe_workers) as client:
            session = await _authenticate(client, config)
            technologies = apply_filter(catalog_filter, await _list_catalog(session))

            scheduler = DownloadScheduler.for_session(
                session, probe_workers=config.probe_workers, overwrite=overwrite
            )

            async with ProgressManager(console) as progress:
                progress.start_counter(
                    "Retrieving lesson information", count_lessons(technologies)
                )
                enriched = await scheduler.enrich(
                    technologies, on_progress=progress.update_counter
                )
                progress.finish_counter("Retrieved lesson information")

            console.print()
            print_matching_courses(enriched, console)
            console.print()

            course_count = count_courses(enriched)
            prompt = (
                "Download this course?"
                if course_count == 1
                else f"Download these {course_count} courses?"
            )
            if not yes and not typer.confirm(prompt, default=True):
                raise typer.Abort()

            tasks = scheduler.plan(enriched, download_path)
            try:
                async with ProgressManager(console) as progress:
                    await scheduler.transfer(
                        tasks,
                        on_task_start=progress.start_transfer,
                        on_progress=progress.update_transfer,
                        on_task_done=progress.finish_transfer,
                    )
            finally:
                print_summary_panel(scheduler.stats, console, total_tasks=len(tasks))

    asyncio.run(_download_async())
