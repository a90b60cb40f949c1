"""Main CLI entry point for shellrack."""

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from shellrack.config.messages import (
    ERROR_MESSAGES,
    HELP_TEXT,
    INFO_MESSAGES,
    PROJECT_TAGLINE,
    SUCCESS_MESSAGES,
)
from shellrack.config.paths import DOTENV_FILENAME
from shellrack.constants import LOG_LEVELS, VERSION
from shellrack.exceptions import ShellrackError
from shellrack.models.enums import ErrorKind, OperationMode
from shellrack.models.results import BackupResult, RestoreResult
from shellrack.services.config_service import ConfigService
from shellrack.services.history_service import run_backup, run_restore
from shellrack.store.core import HistoryStore
from shellrack.utils import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="shellrack",
    help=PROJECT_TAGLINE,
    add_completion=False,
    rich_markup_mode="rich",
)


def _config_service(ctx: typer.Context) -> ConfigService:
    if isinstance(ctx.obj, ConfigService):
        return ctx.obj
    return ConfigService()


def _run(ctx: typer.Context, mode: OperationMode, history: Path | None, db: Path | None) -> None:
    paths = _config_service(ctx).resolve_paths(history_option=history, db_option=db)

    result: BackupResult | RestoreResult
    if mode is OperationMode.BACKUP:
        print_info(INFO_MESSAGES["backing_up"].format(history_file=paths.history_file))
        result = run_backup(paths.history_file, paths.db_file)
    else:
        print_info(INFO_MESSAGES["restoring"].format(history_file=paths.history_file))
        result = run_restore(paths.history_file, paths.db_file)

    if not result.success:
        key = "backup_failed" if mode is OperationMode.BACKUP else "restore_failed"
        print_error(ERROR_MESSAGES[key].format(error=result.error))
        if result.error_kind is ErrorKind.SCAN_FAILURE and result.record_count:
            print_warning(ERROR_MESSAGES["partial_restore"].format(count=result.record_count))
        raise typer.Exit(code=1)

    if mode is OperationMode.BACKUP:
        print_success(
            SUCCESS_MESSAGES["backup_complete"].format(
                count=result.record_count, db_file=result.db_path
            )
        )
    else:
        print_success(
            SUCCESS_MESSAGES["restore_complete"].format(
                count=result.record_count, history_file=result.history_path
            )
        )
        print_info(INFO_MESSAGES["restore_appends"])


@app.command("backup")
def backup(
    ctx: typer.Context,
    history: Path | None = typer.Option(
        None,
        "--history",
        "-H",
        help="Shell history file to read (default: ~/.zsh_history)",
    ),
    db: Path | None = typer.Option(
        None,
        "--db",
        "-d",
        help="SQLite database to write (default: ~/.zsh_history.sqlite)",
    ),
) -> None:
    """Back up shell history into the SQLite store.

    Keeps one row per distinct command; the latest occurrence in the file
    wins. Running backup again on the same file changes nothing.
    """
    _run(ctx, OperationMode.BACKUP, history, db)


@app.command("restore")
def restore(
    ctx: typer.Context,
    history: Path | None = typer.Option(
        None,
        "--history",
        "-H",
        help="History file to append to (default: ~/.zsh_history)",
    ),
    db: Path | None = typer.Option(
        None,
        "--db",
        "-d",
        help="SQLite database to read (default: ~/.zsh_history.sqlite)",
    ),
) -> None:
    """Restore shell history from the SQLite store.

    Appends every stored command, most recent first. Existing lines are left
    alone, so restoring twice into the same file duplicates the restored lines.
    """
    _run(ctx, OperationMode.RESTORE, history, db)


@app.command("info")
def info(
    ctx: typer.Context,
    history: Path | None = typer.Option(None, "--history", "-H", help="History file"),
    db: Path | None = typer.Option(None, "--db", "-d", help="SQLite database"),
) -> None:
    """Show resolved paths and how many commands the store holds."""
    service = _config_service(ctx)
    paths = service.resolve_paths(history_option=history, db_option=db)

    console.print()
    console.print("[bold]Configuration:[/bold]")
    console.print(f"  Config file: {service.config_path}")
    console.print(
        f"  History file: {paths.history_file} [dim]({paths.history_source.value})[/dim]"
    )
    console.print(f"  Database: {paths.db_file} [dim]({paths.db_source.value})[/dim]")

    if not paths.db_file.exists():
        console.print("  Stored commands: [dim]no backup yet[/dim]")
        return

    try:
        with HistoryStore(paths.db_file) as store:
            count = store.count()
    except ShellrackError as e:
        print_error(ERROR_MESSAGES["info_failed"].format(error=e))
        raise typer.Exit(code=1) from e

    console.print(f"  Stored commands: [green]{count}[/green]")


@app.command("version")
def version() -> None:
    """Show version information."""
    print_panel(
        f"[bold cyan]shellrack[/bold cyan] version [green]{VERSION}[/green]\n\n{PROJECT_TAGLINE}",
        title="Version",
        style="cyan",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information",
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: DEBUG, INFO, WARNING, ERROR",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file instead of stderr",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug logging and tracebacks on unexpected errors",
    ),
) -> None:
    """shellrack - back up and restore shell history.

    Get started:
        shellrack backup      # ~/.zsh_history -> ~/.zsh_history.sqlite
        shellrack restore     # append stored commands to ~/.zsh_history
    """
    if version_flag:
        version()
        raise typer.Exit()

    service = ConfigService()
    log_config = service.resolve_logging(
        level_option="DEBUG" if debug else log_level,
        file_option=log_file,
    )
    if log_config.level not in LOG_LEVELS:
        print_error(
            ERROR_MESSAGES["invalid_log_level"].format(
                level=log_config.level, choices=", ".join(LOG_LEVELS)
            )
        )
        raise typer.Exit(code=2)

    configure_logging(
        log_config.level,
        Path(log_config.file) if log_config.file else None,
        log_config.rotation,
    )
    ctx.obj = service

    # No operation selected: show help and do nothing
    if ctx.invoked_subcommand is None:
        console.print(HELP_TEXT)
        raise typer.Exit()


def cli_main() -> None:
    """Main entry point for the CLI.

    This is the function that gets called when running the 'shellrack' command.
    It handles exceptions and provides user-friendly error messages.
    """
    # Load .env file from current directory if it exists
    load_dotenv(Path.cwd() / DOTENV_FILENAME, verbose=False)

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        if isinstance(e, typer.Exit):
            sys.exit(e.exit_code)

        print_error(ERROR_MESSAGES["generic_error"].format(error=str(e)))

        if "--debug" in sys.argv:
            import traceback

            console.print("\n[dim]Traceback:[/dim]")
            traceback.print_exc()

        sys.exit(1)


if __name__ == "__main__":
    cli_main()
