"""Command line interface for the antd-theme engine.

This module provides the ``antd-theme`` command group for inspecting
palettes, rendering theme CSS and variables, classifying viewport widths
and listing registered themes.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import EngineConfig, load_config
from .theme_engine import (
    PRESET_SCALES,
    Color,
    ColorScale,
    ColorType,
    CustomColorConfig,
    GridConfig,
    ThemeError,
    generate_range_media_query,
    get_current_breakpoint,
    get_preset_scale,
)
from .theme_engine.color import BASE_STOP, DARK_STOP, DARKER_STOP, LIGHT_STOP, LIGHTER_STOP

logger = logging.getLogger(__name__)

STOP_LABELS = {
    LIGHTER_STOP: "lighter",
    LIGHT_STOP: "light",
    BASE_STOP: "base",
    DARK_STOP: "dark",
    DARKER_STOP: "darker",
}


def _setup_logging(verbose: bool, level: str) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
            force=True,
        )
    else:
        logging.getLogger("antd_theme").setLevel(level)


def _fail(console: Console, action: str, error: Exception) -> None:
    console.print(f"[red]Error {action}: {escape(str(error))}[/red]")
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="antd-theme")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to a config.yaml file')
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Override the data directory (user themes live in <data-dir>/themes)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], data_dir: Optional[Path], verbose: bool):
    """Derive Ant Design palettes, tokens and theme CSS."""
    try:
        config = load_config(config_path)
    except ValueError as e:
        _fail(Console(), "loading configuration", e)
        return

    if data_dir:
        config.data_dir = str(data_dir)

    _setup_logging(verbose, config.log_level)
    logger.debug(f"Using data directory {config.data_dir}")
    ctx.obj = config


def _get_config(ctx: click.Context) -> EngineConfig:
    return ctx.find_object(EngineConfig) or EngineConfig()


@main.command()
@click.argument('color')
@click.option('--vars', 'show_vars', is_flag=True, help='Also print the CSS variables for this color')
@click.pass_context
def palette(ctx: click.Context, color: str, show_vars: bool):
    """Show the ten-stop scale of COLOR.

    COLOR is a hex color (derived scale) or a preset name such as blue or gold.
    """
    console = Console()
    try:
        if color.strip().lower() in PRESET_SCALES:
            scale = get_preset_scale(color)
            base = scale.base
        else:
            base = Color.from_hex(color)
            scale = ColorScale.from_base(base)

        table = Table(title=f"Palette for {base.to_hex_string()}", show_header=True, header_style="bold")
        table.add_column("Stop", justify="right", style="cyan")
        table.add_column("Swatch")
        table.add_column("Hex", style="bold")
        table.add_column("RGB")
        table.add_column("HSL")
        table.add_column("Role", style="magenta")

        for index, stop in enumerate(scale.stops, start=1):
            hex_value = stop.to_hex_string()
            table.add_row(
                str(index),
                Text("      ", style=f"on {hex_value}"),
                hex_value,
                stop.to_rgb_string(),
                stop.to_hsl_string(),
                STOP_LABELS.get(index, ""),
            )

        console.print(table)

        if show_vars:
            config = _get_config(ctx)
            custom = CustomColorConfig({ColorType.PRIMARY: base}, prefix=config.css_var_prefix)
            for name, value in sorted(custom.to_css_variables().items()):
                click.echo(f"{name}: {value};")

    except (ThemeError, ValueError) as e:
        _fail(console, "building palette", e)


@main.command()
@click.option('--theme', 'theme_name', help='Theme name (defaults to the configured theme)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write CSS to a file instead of stdout')
@click.pass_context
def css(ctx: click.Context, theme_name: Optional[str], output: Optional[Path]):
    """Render the full stylesheet of a theme."""
    console = Console()
    try:
        config = _get_config(ctx)
        registry = config.create_registry()
        engine = registry.get_theme(theme_name or config.default_theme)
        stylesheet = engine.generate_css()

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(stylesheet, encoding='utf-8')
            console.print(f"[green]Wrote {len(stylesheet)} bytes to {escape(str(output))}[/green]")
        else:
            click.echo(stylesheet, nl=False)

    except (ThemeError, OSError) as e:
        _fail(console, "rendering CSS", e)


@main.command('vars')
@click.option('--theme', 'theme_name', help='Theme name (defaults to the configured theme)')
@click.pass_context
def show_vars(ctx: click.Context, theme_name: Optional[str]):
    """List the CSS variables of a theme."""
    console = Console()
    try:
        config = _get_config(ctx)
        engine = config.create_registry().get_theme(theme_name or config.default_theme)
        variables = engine.to_css_variables()

        table = Table(title=f"CSS variables: {engine.name}", show_header=True, header_style="bold")
        table.add_column("Variable", style="cyan", no_wrap=True)
        table.add_column("Value")

        for name in sorted(variables):
            table.add_row(name, escape(variables[name]))

        console.print(table)
        console.print(f"[dim]{len(variables)} variables[/dim]")

    except ThemeError as e:
        _fail(console, "listing variables", e)


@main.command()
@click.argument('width', type=int)
def breakpoint(width: int):
    """Classify a viewport WIDTH in pixels."""
    console = Console()
    current = get_current_breakpoint(width)
    grid = GridConfig()

    container = grid.container_width_for(width)
    lines = [
        f"[bold]Breakpoint:[/bold] {current.label}",
        f"[bold]Range:[/bold] {current.min_width}px - "
        f"{str(current.max_width) + 'px' if current.max_width is not None else 'unbounded'}",
        f"[bold]Media query:[/bold] {generate_range_media_query(current, current) or '(all widths)'}",
        f"[bold]Grid gutter:[/bold] {grid.gutter_for_width(width)}px",
        f"[bold]Container max width:[/bold] {str(container) + 'px' if container is not None else 'fluid'}",
    ]
    console.print(Panel("\n".join(lines), title=f"Width {width}px", border_style="blue"))


@main.command('list')
@click.pass_context
def list_themes(ctx: click.Context):
    """List all available themes."""
    console = Console()
    try:
        config = _get_config(ctx)
        themes = config.create_registry().list_available_themes()

        table = Table(title="Available Themes", show_header=True, header_style="bold")
        table.add_column("Name", style="cyan", min_width=12)
        table.add_column("Type", style="blue", width=8)
        table.add_column("Mode")
        table.add_column("Description")

        for theme_info in themes:
            name = theme_info['name']
            name_style = "cyan bold" if name == config.default_theme else "cyan"
            if theme_info.get('error'):
                mode = "[red]error[/red]"
            else:
                mode = "dark" if theme_info.get('dark') else "light"
                if theme_info.get('compact'):
                    mode += ", compact"

            table.add_row(
                f"[{name_style}]{escape(name)}[/{name_style}]",
                theme_info.get('type', 'unknown'),
                mode,
                escape(theme_info.get('description', '')),
            )

        console.print(table)

    except (ThemeError, OSError) as e:
        _fail(console, "listing themes", e)


@main.command('hash')
@click.option('--theme', 'theme_name', help='Theme name (defaults to the configured theme)')
@click.pass_context
def theme_hash(ctx: click.Context, theme_name: Optional[str]):
    """Print the stable hash of a theme."""
    console = Console()
    try:
        config = _get_config(ctx)
        engine = config.create_registry().get_theme(theme_name or config.default_theme)
        click.echo(engine.theme_hash())
    except ThemeError as e:
        _fail(console, "hashing theme", e)


if __name__ == '__main__':
    main()
