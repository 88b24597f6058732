from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, dump_config, load_config
from ..core import PolicyRenderer
from ..models import RenderStatus
from ..pipeline import ConversionError
from ..theme import Theme, ThemeManager
from ..utils import atomic_write

console = Console()

app = typer.Typer(help="Render a markdown privacy policy into a themed HTML page")


def _load_config(path: Path | None) -> AppConfig:
    return load_config(path)


@app.command()
def render(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
    theme: Theme | None = typer.Option(None, "--theme", help="Override the stored theme"),
    system_dark: bool = typer.Option(False, "--system-dark", help="Assume the OS prefers dark mode"),
) -> None:
    cfg = _load_config(config)
    renderer = PolicyRenderer(cfg)
    selected = theme or ThemeManager(cfg.theme).current(system_dark)
    result = renderer.write_site(selected)
    outcome = result.outcome
    if outcome.status is RenderStatus.ERROR:
        console.print(f"[red]Render failed[/red]: {outcome.error_code} - error panel written to {result.output_path}")
        raise typer.Exit(1)
    if outcome.status is RenderStatus.FALLBACK:
        console.print(f"[yellow]Primary source unavailable[/yellow] ({', '.join(outcome.warnings)}); used embedded copy")
    console.print(f"[green]Success[/green]: {result.summary}")
    console.print(f"Render log: {renderer.logger.path}")


@app.command()
def convert(
    file: Path,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the fragment to a file"),
    plain: bool = typer.Option(False, "--plain", help="Skip header, link and emoji decoration"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    renderer = PolicyRenderer(cfg)
    try:
        markdown = file.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Cannot read[/red] {file}: {exc}")
        raise typer.Exit(1) from exc
    try:
        fragment = renderer.convert(markdown, decorate=not plain)
    except ConversionError as exc:
        console.print(f"[red]Conversion failed[/red]: {exc.code} - {exc}")
        raise typer.Exit(1) from exc
    if output is None:
        typer.echo(fragment)
        return
    atomic_write(output, fragment)
    console.print(f"[green]Success[/green]: {file.name} -> {output}")


@app.command("theme")
def theme_command(
    toggle: bool = typer.Option(False, "--toggle", help="Switch between light and dark"),
    set_theme: Theme | None = typer.Option(None, "--set", help="Store an explicit theme"),
    system_dark: bool = typer.Option(False, "--system-dark", help="Assume the OS prefers dark mode"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    manager = ThemeManager(cfg.theme)
    if set_theme is not None:
        current = manager.set(set_theme)
    elif toggle:
        current = manager.toggle(system_dark)
    else:
        current = manager.current(system_dark)
    table = Table(title="Theme preference")
    table.add_column("Key")
    table.add_column("Theme")
    table.add_column("Stored in")
    table.add_row(cfg.theme.storage_key, current.value, str(cfg.theme.storage_path))
    console.print(table)


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    typer.echo(dump_config(_load_config(config)))


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", min=1, max=65535, help="Bind port"),
) -> None:
    import uvicorn

    from ..api import create_app

    cfg = _load_config(config)
    try:
        api = create_app(config, require_enabled=True)
    except RuntimeError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    uvicorn.run(api, host=host or cfg.api.host, port=port or cfg.api.port)


if __name__ == "__main__":
    app()
