from __future__ import annotations

from typing import Dict, Optional, Tuple

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.status import Status
from rich.text import Text

LEVEL_STYLES: Dict[str, Tuple[str, bool]] = {
    "INFO": ("bold green", False),
    "WARN": ("bold yellow", False),
    "ERROR": ("bold red", False),
    "DEBUG": ("bold blue", True),
    "DONE": ("bold cyan", False),
}


class RichLogger:
    """Console logger for pipeline runs; DEBUG lines only show with ``verbose``."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def log(self, level: str, msg: str) -> None:
        style, verbose_only = LEVEL_STYLES[level]
        if verbose_only and not self.verbose:
            return
        self.console.log(Text(level.ljust(5), style=style), msg)

    def info(self, msg: str) -> None:
        self.log("INFO", msg)

    def warn(self, msg: str) -> None:
        self.log("WARN", msg)

    def error(self, msg: str) -> None:
        self.log("ERROR", msg)

    def debug(self, msg: str) -> None:
        self.log("DEBUG", msg)

    def done(self, msg: str) -> None:
        self.log("DONE", msg)

    def step(self, title: str) -> None:
        self.console.print(Rule(title, style="dim"))

    def status(self, label: str) -> Status:
        return self.console.status(label)

    def progress(self, label: str) -> Progress:
        return Progress(
            SpinnerColumn(),
            TextColumn(f"[bold]{label}"),
            BarColumn(bar_width=None),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
