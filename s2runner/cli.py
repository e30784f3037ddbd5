"""CLI entry point for s2runner using Click."""
import click

from . import __version__
from .config import Config, load_config
from .errors import CommandError
from .geo import LatLng, get_bounds
from .loop import CommandLoop
from .operations import cover_rect, format_cell_id

# Negative coordinates must not be taken for options
NUMERIC_ARGS = {"ignore_unknown_options": True}

config_option = click.option(
    "--config", "-c", type=click.Path(exists=True, dir_okay=False), default=None, help="Path to config YAML"
)
level_option = click.option("--level", type=click.IntRange(0, 30), default=None, help="Fixed covering level (overrides config)")


def _load(config_path, **overrides) -> Config:
    try:
        return load_config(config_path).override(**overrides)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config")


def _run_one(config: Config, line: str) -> None:
    """Execute a single command line and print its output without the sentinel."""
    try:
        output = CommandLoop(config).execute(line)
    except CommandError as e:
        raise click.ClickException(f"{e.kind}: {e}")
    for value in output:
        click.echo(value)


@click.group()
@click.version_option(version=__version__)
def cli():
    """S2 cell coverings and composite identifier decoding."""
    pass


@cli.command()
@config_option
@level_option
@click.option("--keep-going", is_flag=True, help="Report command errors and continue instead of exiting")
@click.option("--verbose", "-v", is_flag=True, help="Report each command on stderr")
def serve(config, level, keep_going, verbose):
    """Run the command loop on stdin/stdout.

    \b
    PROTOCOL:
        cells SWLAT SWLNG NELAT NELNG   - covering cell ids, one per line
        glob IDENTIFIER                 - latitude, longitude, amount
        exit                            - stop
    Every answer ends with a line containing a single "."
    """
    cfg = _load(config, level=level, keep_going=keep_going or None, verbose=verbose or None)
    loop = CommandLoop(cfg)
    try:
        loop.run(click.get_text_stream("stdin"))
    except CommandError as e:
        raise click.ClickException(f"{e.kind}: {e}")


@cli.command(context_settings=NUMERIC_ARGS)
@config_option
@level_option
@click.argument("coords", nargs=-1)
def cells(config, level, coords):
    """Print the cells covering a rectangle.

    \b
    Example:
        s2runner cells -- 40.70 -74.02 40.72 -74.00
    """
    cfg = _load(config, level=level)
    _run_one(cfg, " ".join(["cells", *coords]))


@cli.command("glob")
@config_option
@click.option("--allow-overlap", is_flag=True, help="Accept identifiers whose amount slice overlaps the cell id")
@click.argument("identifier")
def glob_command(config, allow_overlap, identifier):
    """Decode a composite identifier into latitude, longitude and amount."""
    cfg = _load(config, allow_overlapping_amount=allow_overlap or None)
    _run_one(cfg, f"glob {identifier}")


@cli.command(context_settings=NUMERIC_ARGS)
@config_option
@level_option
@click.argument("lat", type=float)
@click.argument("lng", type=float)
@click.argument("radius", type=click.FloatRange(min=0))
def around(config, level, lat, lng, radius):
    """Print the cells covering RADIUS meters around LAT LNG."""
    cfg = _load(config, level=level)
    sw, ne = get_bounds(LatLng(lat, lng), radius)
    click.echo(f"Bounds: {sw.to_string()} .. {ne.to_string()}", err=True)
    for cell in cover_rect(sw.lat, sw.lng, ne.lat, ne.lng, level=cfg.level, max_cells=cfg.max_cells):
        click.echo(format_cell_id(cell))


@cli.command("init-config")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config(path, force):
    """Write the default config YAML to PATH."""
    from pathlib import Path

    if Path(path).exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    Config().save_yaml(path)
    click.echo(f"Wrote default config to {path}")


if __name__ == "__main__":
    cli()
