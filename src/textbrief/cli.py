from __future__ import annotations
import asyncio
import sys
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from rich import box
from . import logconf
from .config import TextbriefConfig, write_default_config
from .parser import read_input
from .service import SummarizationService
from .summarizer import split_sentences, target_count, word_frequencies

app = typer.Typer(help="Summarize text with a hosted model or a local extractive fallback")
console = Console()


def _read_text(path: Optional[Path]) -> str:
    if path is not None:
        if not path.exists():
            console.print(f"[red]No such file:[/red] {path}")
            raise typer.Exit(code=1)
        return read_input(path)
    if sys.stdin.isatty():
        console.print("Provide a PATH or pipe text on stdin")
        raise typer.Exit(code=2)
    return sys.stdin.read()


@app.command()
def init(
    config_path: Path = typer.Option("textbrief.json", help="Where to create config"),
):
    """Create a default config file."""
    try:
        write_default_config(config_path)
    except FileExistsError as ex:
        console.print(f"[red]{ex}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Created[/green] {config_path}")


@app.command()
def summarize(
    path: Optional[Path] = typer.Argument(None, help="Text or HTML file (stdin if omitted)"),
    config_path: Path = typer.Option("textbrief.json", help="Config file, used if present"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
):
    """Summarize a document and show length statistics."""
    cfg = TextbriefConfig.load(config_path)
    logconf.init(cfg.log_level)
    text = _read_text(path)
    if not text.strip():
        console.print("[yellow]Nothing to summarize[/yellow]")
        raise typer.Exit(code=1)

    result = asyncio.run(SummarizationService(cfg).summarize(text))
    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, indent=2))
        return

    console.print(result.summary)
    table = Table(title="Summary Stats", box=box.SIMPLE)
    table.add_column("Metric", style="bold")
    table.add_column("Original", justify="right")
    table.add_column("Summary", justify="right")
    table.add_row("characters", str(result.original_length), str(result.summary_length))
    table.add_row("words", str(result.original_word_count), str(result.summary_word_count))
    console.print(table)
    mode = result.mode + (" (fallback)" if result.fallback else "")
    console.print(f"compression [bold]{result.compression_ratio}%[/bold], mode {mode}")


@app.command("stats")
def stats_cmd(
    path: Optional[Path] = typer.Argument(None, help="Text or HTML file (stdin if omitted)"),
    top: int = typer.Option(10, help="Number of terms to show"),
):
    """Show sentence segmentation and term frequencies for a document."""
    text = _read_text(path)
    sents = split_sentences(text.strip())
    freq = word_frequencies(text)

    table = Table(title="Document Stats", box=box.SIMPLE)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("sentences", str(len(sents)))
    if len(sents) > 3:
        table.add_row("summary sentences", str(target_count(len(sents))))
    table.add_row("distinct terms", str(len(freq)))
    console.print(table)

    if freq:
        terms = Table(title="Top Terms", box=box.MINIMAL_HEAVY_HEAD)
        terms.add_column("term")
        terms.add_column("count", justify="right")
        for word, n in freq.most_common(top):
            terms.add_row(word, str(n))
        console.print(terms)


@app.command()
def serve(
    config_path: Path = typer.Option("textbrief.json", help="Config file, used if present"),
    host: Optional[str] = typer.Option(None, help="Override host in config"),
    port: Optional[int] = typer.Option(None, help="Override port in config"),
):
    """Run the HTTP API."""
    import uvicorn
    from .server.main import create_app

    cfg = TextbriefConfig.load(config_path)
    if host is not None:
        cfg.host = host
    if port is not None:
        cfg.port = port
    logconf.init(cfg.log_level)
    console.print(f"[bold]Text Summarizer API[/bold] on http://{cfg.host}:{cfg.port} ({cfg.mode} mode)")
    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port, log_config=None)


def main():
    app()


if __name__ == "__main__":
    main()
