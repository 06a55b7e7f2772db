import os
import sys
from typing import Optional

from loguru import logger as loguru_logger
from rich.console import Console

# stdout is reserved for the stdio protocol
console = Console(stderr=True)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Route loguru records to stderr at `level`, plus a rotating file if given.

    Console lines printed through rich are independent of these sinks.
    """
    loguru_logger.remove()
    loguru_logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level} | {message}")
    if log_file:
        loguru_logger.add(log_file, level=level.upper(), rotation="10 MB", retention=3)


class SystemLogger:
    """
    Centralized logger for the file operations server.
    Respects FILEOPS_QUIET and attributes every record to the caller.
    """

    @staticmethod
    def _is_quiet() -> bool:
        return os.getenv("FILEOPS_QUIET", "false").lower() == "true"

    @staticmethod
    def _log(level: str, msg: str) -> None:
        # depth=2 skips _log and the public helper
        loguru_logger.opt(depth=2).log(level, msg)

    @staticmethod
    def debug(msg: str):
        SystemLogger._log("DEBUG", msg)

    @staticmethod
    def info(msg: str, to_cli: bool = False):
        """Log info - console output only when to_cli is set."""
        SystemLogger._log("INFO", msg)
        if to_cli and not SystemLogger._is_quiet():
            console.print(f"[dim]INFO:[/dim] {msg}")

    @staticmethod
    def success(msg: str):
        SystemLogger._log("SUCCESS", msg)
        if not SystemLogger._is_quiet():
            console.print(f"[green]✓ {msg}[/green]")

    @staticmethod
    def warning(msg: str):
        SystemLogger._log("WARNING", msg)
        if not SystemLogger._is_quiet():
            console.print(f"[yellow]⚠ WARNING:[/yellow] {msg}")

    @staticmethod
    def error(msg: str, detail: Optional[str] = None):
        """Error log - detail is appended to the record and shown dimmed."""
        if detail:
            SystemLogger._log("ERROR", f"{msg} - {detail}")
        else:
            SystemLogger._log("ERROR", msg)
        if not SystemLogger._is_quiet():
            console.print(f"[bold red]✗ ERROR:[/bold red] {msg}")
            if detail:
                console.print(f"[dim red]  {detail}[/dim red]")


# Global singleton
logger = SystemLogger()
