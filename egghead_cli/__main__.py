"""
Entry point for egghead-cli: runs the typer app and turns errors into exit codes.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from egghead_cli.cli.app import app
from egghead_cli.cli.formatters import format_error_with_suggestions
from egghead_cli.exceptions import EggheadCliError, TransferError

log = logging.getLogger("egghead_cli")


def _error_context(error: EggheadCliError) -> dict | None:
    """Where a failed transfer stopped, for the error panel."""
    if not isinstance(error, TransferError) or error.task is None:
        return None
    return {
        "lesson": error.task.describe(),
        "file": str(error.task.destination),
        "bytes written": error.bytes_downloaded or 0,
    }


def main() -> None:
    # Rich writes check marks and bullets; the Windows console needs UTF-8.
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    console = Console()
    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]Cancelled. Complete lessons are kept.[/yellow]")
        sys.exit(0)
    except EggheadCliError as e:
        console.print(f"\n{format_error_with_suggestions(e, _error_context(e))}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
