"""CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from tunepick.config import Config

EXIT_FAILURE = 1
EXIT_CANCELLED = 2

app = typer.Typer(
    name="tunepick",
    help="Console helpers - arrow-key menu, mpv streaming and yt-dlp downloads.",
    no_args_is_help=True,
)
console = Console()
# Menus draw on stderr so stdout only carries the selection
ui_console = Console(stderr=True)


def _get_config() -> Config:
    """Lazy import and load config."""
    from tunepick.config import Config

    return Config.load()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=ui_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Console helpers - arrow-key menu, mpv streaming and yt-dlp downloads."""
    _setup_logging(verbose)


@app.command()
def menu(
    options: Annotated[list[str] | None, typer.Argument(help="Entries to choose from")] = None,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Menu heading")] = None,
    index: Annotated[
        bool, typer.Option("--index", "-i", help="Print the index instead of the entry")
    ] = False,
):
    """Pick one entry with the arrow keys and print it."""
    from tunepick.exceptions import KeyReadError
    from tunepick.ui.menu import InteractiveMenu, print_usage

    if not options:
        print_usage(ui_console)
        return

    cfg = _get_config()
    try:
        result = InteractiveMenu(
            options,
            title=title or cfg.menu_title,
            return_index=index,
            console=ui_console,
        ).run()
    except KeyReadError as e:
        ui_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_FAILURE)

    if result.is_cancelled:
        raise typer.Exit(EXIT_CANCELLED)
    typer.echo(result.unwrap())


@app.command("config")
def config_cmd(
    key: Annotated[str | None, typer.Argument(help="Setting name")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show settings, or set KEY to VALUE."""
    cfg = _get_config()

    if key is None:
        table = Table(title=f"Settings ({cfg.config_file})")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for name, current in cfg.items():
            table.add_row(name, str(current))
        console.print(table)
        return

    if key not in cfg.DEFAULTS:
        known = ", ".join(cfg.DEFAULTS)
        ui_console.print(f"[red]Error:[/red] Unknown setting '{key}'. Known: {known}")
        raise typer.Exit(EXIT_FAILURE)

    if value is None:
        typer.echo(getattr(cfg, key))
        return

    try:
        stored = cfg.set_from_string(key, value)
    except ValueError as e:
        ui_console.print(f"[red]Error:[/red] Invalid value for {key}: {e}")
        raise typer.Exit(EXIT_FAILURE)
    except OSError as e:
        ui_console.print(f"[red]Error:[/red] Cannot write {cfg.config_file}: {e}")
        raise typer.Exit(EXIT_FAILURE)
    console.print(f"[green]✓[/green] {key} = {stored}")


@app.command()
def stream(
    query: Annotated[list[str], typer.Argument(help="Search terms or a video URL")],
    audio: Annotated[bool, typer.Option("--audio", "-a", help="Audio only")] = False,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=1, help="Number of search results")
    ] = None,
):
    """Search YouTube, pick a result and play it with mpv."""
    from tunepick.exceptions import KeyReadError, MediaToolError
    from tunepick.media.stream import stream as run_stream
    from tunepick.ui.rich_menu import RichTerminalMenu

    cfg = _get_config()
    target = " ".join(query)
    try:
        code = run_stream(
            target,
            menu=RichTerminalMenu(console=ui_console),
            config=cfg,
            audio_only=audio,
            limit=limit,
        )
    except (MediaToolError, KeyReadError, ValueError) as e:
        ui_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_FAILURE)

    if code is None:
        ui_console.print("[dim]Nothing played[/dim]")
        raise typer.Exit(EXIT_CANCELLED)
    if code != 0:
        raise typer.Exit(code)


@app.command()
def download(
    urls: Annotated[list[str] | None, typer.Argument(help="Video or playlist URLs")] = None,
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="File with one URL per line")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Target directory")] = None,
    audio_format: Annotated[
        str | None, typer.Option("--format", help="Audio format (mp3, opus, m4a, ...)")
    ] = None,
    no_aria2c: Annotated[bool, typer.Option("--no-aria2c", help="Don't use aria2c")] = False,
    cookies: Annotated[Path | None, typer.Option("--cookies", help="Cookies file")] = None,
):
    """Download audio for a batch of URLs."""
    from tunepick.exceptions import MediaToolError
    from tunepick.media.download import download_batch, read_url_list

    cfg = _get_config()

    targets = list(urls or [])
    if file:
        try:
            targets += read_url_list(file)
        except OSError as e:
            ui_console.print(f"[red]Error:[/red] Cannot read {file}: {e}")
            raise typer.Exit(EXIT_FAILURE)
    if not targets:
        ui_console.print("[red]Error:[/red] No URLs given (pass URLs or --file)")
        raise typer.Exit(EXIT_FAILURE)

    def progress(url, summary) -> None:
        if summary.skipped and summary.skipped[-1] == url:
            mark = "[dim]-[/dim]"
        elif summary.succeeded and summary.succeeded[-1] == url:
            mark = "[green]✓[/green]"
        else:
            mark = "[red]✗[/red]"
        ui_console.print(f"{mark} {url}")

    try:
        summary = download_batch(
            targets,
            ytdlp_path=cfg.ytdlp_path,
            output_dir=output or cfg.download_path,
            audio_format=audio_format or cfg.audio_format,
            use_aria2c=cfg.use_aria2c and not no_aria2c,
            cookies=cookies or cfg.cookies_path,
            on_progress=progress,
        )
    except (MediaToolError, OSError) as e:
        ui_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_FAILURE)

    table = Table(title="Download summary")
    table.add_column("Result")
    table.add_column("Count", justify="right")
    table.add_row("[green]Succeeded[/green]", str(len(summary.succeeded)))
    table.add_row("[red]Failed[/red]", str(len(summary.failed)))
    table.add_row("[dim]Skipped[/dim]", str(len(summary.skipped)))
    table.add_row("[bold]Total[/bold]", str(summary.total))
    console.print(table)

    for url in summary.failed:
        console.print(f"[red]Failed:[/red] {url}")
    if not summary.ok:
        raise typer.Exit(EXIT_FAILURE)
