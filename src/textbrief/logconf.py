from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler


def init(level: str = "INFO") -> None:
    """Configure root logger once per process. Logs go to stderr so stdout stays pipeable."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s | %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
