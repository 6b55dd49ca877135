"""Command-line interface for landsat-overpass."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timedelta

import click
import pandas as pd
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..analysis.analyzer import STATUS_OK, AnalysisReport, LandsatAnalyzer
from ..config import OverpassConfig
from ..core.bands import describe_band
from ..core.errors import CatalogError, ConfigurationError, InvalidDateRange, InvalidLocation
from ..core.location import GroundPoint
from ..core.passes import OverpassResult
from ..core.satellites import SATELLITE_CATALOG

console = Console()


class ServiceUnavailable(click.ClickException):
    """An upstream service failed; distinct exit code for automation."""

    exit_code = 3


def _format_countdown(result: OverpassResult) -> str:
    seconds = result.time_until()
    if seconds is None:
        return "-"
    if seconds < 0:
        return "passed"
    hours, remainder = divmod(int(seconds), 3600)
    days, hours = divmod(hours, 24)
    minutes = remainder // 60
    if days > 0:
        return f"in {days}d {hours}h"
    if hours > 0:
        return f"in {hours}h {minutes}m"
    return f"in {minutes}m"


def _format_acquired(value: str | None) -> str:
    """Catalog timestamp as "YYYY-MM-DD HH:MM:SS UTC", raw text if unparseable."""
    if not value:
        return "unknown"
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError):
        return value
    if timestamp.tzinfo is None:
        timestamp = timestamp.tz_localize("UTC")
    return timestamp.tz_convert("UTC").strftime("%Y-%m-%d %H:%M:%S UTC")


def _overpass_table(point: GroundPoint, results: list[OverpassResult]) -> Table:
    table = Table(
        title=f"Next Landsat overpasses - {point.label}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Satellite", style="bold")
    table.add_column("Next Overpass (UTC)")
    table.add_column("Countdown", justify="right")
    table.add_column("Note", style="dim")

    for result in results:
        table.add_row(
            result.satellite_name,
            result.format_time() if result.found else "[yellow]Unable to predict[/yellow]",
            _format_countdown(result),
            result.error or "",
        )
    return table


def _print_report(report: AnalysisReport) -> None:
    console.print(_overpass_table(report.point, report.overpasses))
    console.print()

    window = f"{report.window.start:%Y-%m-%d} to {report.window.end:%Y-%m-%d}"
    if report.scene is None:
        console.print(Panel(
            f"{report.message}\nWindow: {window}, cloud cover < {report.max_cloud_cover}%",
            title="Scene",
            border_style="yellow",
        ))
        return

    scene = report.scene
    console.print(Panel(
        f"Scene: {scene['scene_id']}\n"
        f"Acquired: {_format_acquired(scene['acquisition_date'])}\n"
        f"Satellite: {scene['satellite']}  Path/Row: {scene['path']}/{scene['row']}\n"
        f"Cloud cover: {scene['cloud_cover']}%",
        title="Selected Scene",
        border_style="green" if report.status == STATUS_OK else "yellow",
    ))

    if not report.reflectance:
        console.print(f"[yellow]{report.message}[/yellow]")
        return

    table = Table(title="Surface Reflectance Bands", box=box.SIMPLE)
    table.add_column("Band", style="bold")
    table.add_column("Description")
    table.add_column("URL", overflow="fold")
    for code, url in report.reflectance.items():
        table.add_row(code, describe_band(code), url)
    console.print(table)


@click.group()
@click.option(
    '--lat',
    type=float,
    help='Latitude of target location'
)
@click.option(
    '--lon',
    type=float,
    help='Longitude of target location'
)
@click.option(
    '--location', '-l',
    type=str,
    default=None,
    help='Location as "lat,lon" or a place name (e.g., "Denver"), geocoded via OpenStreetMap.'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Show log output'
)
@click.version_option(package_name="landsat-overpass")
@click.pass_context
def cli(
    ctx: click.Context,
    lat: float | None,
    lon: float | None,
    location: str | None,
    verbose: bool
) -> None:
    """Landsat overpass prediction and scene lookup.

    Predict when Landsat 8 and 9 will next pass over a location and find
    the most recent surface reflectance scene covering it.

    Examples:

        landsat-overpass -l "40.0,-105.0" overpass

        landsat-overpass -l Denver analyze --cloud-cover 20

        landsat-overpass --lat 40.0 --lon -105.0 grid --json
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    # Priority: lat/lon > --location
    if lat is not None and lon is not None:
        try:
            ctx.obj['location'] = GroundPoint(latitude=lat, longitude=lon, name=location)
        except InvalidLocation as e:
            raise click.BadParameter(str(e)) from e
    else:
        ctx.obj['location'] = location

    if 'config' not in ctx.obj:
        try:
            ctx.obj['config'] = OverpassConfig.from_env()
        except ConfigurationError as e:
            raise click.ClickException(f"Invalid configuration: {e}") from e


def _analyzer(ctx: click.Context) -> LandsatAnalyzer:
    analyzer = ctx.obj.get('analyzer')
    if analyzer is None:
        analyzer = LandsatAnalyzer.from_config(ctx.obj['config'])
        ctx.obj['analyzer'] = analyzer
    return analyzer


def _location(ctx: click.Context) -> GroundPoint:
    location = ctx.obj.get('location')
    if location is None:
        raise click.UsageError("A location is required: use --location or --lat/--lon.")
    try:
        return _analyzer(ctx).resolve(location)
    except InvalidLocation as e:
        raise click.ClickException(
            f"{e}. Try a different name or use --lat/--lon coordinates."
        ) from e


@cli.command()
@click.pass_context
def satellites(ctx: click.Context) -> None:
    """List tracked satellites and their element sets."""
    table = Table(title="Tracked Satellites", box=box.ROUNDED)
    table.add_column("Satellite", style="bold")
    table.add_column("Resolution", justify="right")
    table.add_column("Revisit", justify="right")
    table.add_column("Swath", justify="right")
    table.add_column("NORAD", justify="right")
    table.add_column("Element override")

    for elements in ctx.obj['config'].satellites:
        specs = SATELLITE_CATALOG[elements.name]
        table.add_row(
            elements.name,
            f"{specs.resolution_m:.0f}m",
            f"{specs.revisit_time_days:.0f} days",
            f"{specs.swath_width_km:.0f} km",
            elements.catalog_number,
            f"{specs.env_prefix}_LINE1/2",
        )
    console.print(table)


@cli.command()
@click.option(
    '--refine',
    is_flag=True,
    help='Refine each pass to the instant of closest approach'
)
@click.option(
    '--json', '-j', 'output_json',
    is_flag=True,
    help='Output as JSON for automation'
)
@click.pass_context
def overpass(ctx: click.Context, refine: bool, output_json: bool) -> None:
    """Predict the next overpass of each tracked satellite."""
    analyzer = _analyzer(ctx)
    point = _location(ctx)

    with console.status("Scanning orbits...", spinner="dots"):
        _, results = analyzer.predict_overpasses(point, refine=refine)

    if output_json:
        click.echo(json.dumps({
            "location": f"{point.latitude}, {point.longitude}",
            "overpass_times": [r.to_dict() for r in results],
        }, indent=2))
    else:
        console.print(_overpass_table(point, results))


@cli.command()
@click.option(
    '--cloud-cover', '-c',
    type=click.FloatRange(0, 100),
    default=None,
    help='Maximum scene cloud cover percentage (default: 70)'
)
@click.option(
    '--date-range', '-d',
    default='latest',
    help='"latest" (last 30 days) or "YYYY-MM-DD to YYYY-MM-DD"'
)
@click.option(
    '--json', '-j', 'output_json',
    is_flag=True,
    help='Output as JSON for automation'
)
@click.pass_context
def analyze(ctx: click.Context, cloud_cover: float | None, date_range: str,
            output_json: bool) -> None:
    """Predict overpasses and find the latest matching scene.

    Shows the next pass of each satellite, the best catalog scene for the
    location and date range, and its surface reflectance band URLs.
    """
    analyzer = _analyzer(ctx)
    point = _location(ctx)

    try:
        with console.status("Analyzing...", spinner="dots"):
            report = analyzer.analyze(point, cloud_cover=cloud_cover, date_range=date_range)
    except InvalidDateRange as e:
        raise click.BadParameter(str(e), param_hint="--date-range") from e
    except CatalogError as e:
        raise ServiceUnavailable(f"Scene catalog unavailable: {e}") from e

    if output_json:
        click.echo(report.to_json())
    else:
        _print_report(report)


@cli.command()
@click.option(
    '--mode',
    type=click.Choice(['reflectance', 'snapshot']),
    default='reflectance',
    help='Per-cell work: scene + bands, or imagery snapshot URL'
)
@click.option(
    '--footprint',
    type=float,
    default=None,
    help='Pixel footprint in degrees (default: 0.00027, ~30 m)'
)
@click.option(
    '--cloud-cover', '-c',
    type=click.FloatRange(0, 100),
    default=None,
    help='Maximum scene cloud cover percentage (reflectance mode)'
)
@click.option(
    '--date-range', '-d',
    default='latest',
    help='Scene window (reflectance mode)'
)
@click.option(
    '--date',
    'day',
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help='Snapshot date (snapshot mode, default: today)'
)
@click.option(
    '--json', '-j', 'output_json',
    is_flag=True,
    help='Output as JSON for automation'
)
@click.pass_context
def grid(ctx: click.Context, mode: str, footprint: float | None, cloud_cover: float | None,
         date_range: str, day: datetime | None, output_json: bool) -> None:
    """Analyze the 3x3 pixel neighborhood around the location."""
    analyzer = _analyzer(ctx)
    point = _location(ctx)

    try:
        with console.status(f"Processing grid ({mode})...", spinner="dots"):
            report = analyzer.analyze_area(
                point,
                mode=mode,
                footprint=footprint,
                cloud_cover=cloud_cover,
                date_range=date_range,
                day=day.date() if day else None,
            )
    except InvalidDateRange as e:
        raise click.BadParameter(str(e), param_hint="--date-range") from e

    if output_json:
        click.echo(json.dumps(report.to_dict(), indent=2, default=str))
        return

    console.print(Panel.fit(
        f"3x3 grid around {point.label} ({report.footprint} deg/pixel)",
        style="bold cyan",
    ))
    console.print(report.to_dataframe().to_string(index=False))
    if report.failed:
        console.print(f"[yellow]{len(report.failed)} of {len(report.cells)} cells failed[/yellow]")


@cli.command()
@click.option(
    '--recipient', '-r',
    required=True,
    help='Who to notify (e.g., an email address)'
)
@click.option(
    '--lead-minutes',
    type=click.IntRange(min=0),
    default=30,
    help='Minutes before the pass to notify (default: 30)'
)
@click.pass_context
def remind(ctx: click.Context, recipient: str, lead_minutes: int) -> None:
    """Wait and notify shortly before each predicted overpass.

    Reminders are held in memory; stopping the command discards them.
    """
    from ..notify.reminders import Reminder, ReminderScheduler

    def notify(reminder: Reminder) -> None:
        console.print(f"[bold green]Reminder for {reminder.recipient}:[/bold green] {reminder.message()}")

    analyzer = _analyzer(ctx)
    point = _location(ctx)

    with console.status("Scanning orbits...", spinner="dots"):
        _, results = analyzer.predict_overpasses(point)

    scheduler = ReminderScheduler(notifier=notify, lead_time=timedelta(minutes=lead_minutes))
    for result in results:
        if result.found:
            reminder = scheduler.schedule(recipient, result)
            console.print(
                f"Scheduled {result.satellite_name} reminder for "
                f"{reminder.fire_at.strftime('%Y-%m-%d %H:%M UTC')}"
            )
        else:
            console.print(f"[yellow]No pass predicted for {result.satellite_name}[/yellow]")

    try:
        while scheduler.pending():
            time.sleep(1)
    except KeyboardInterrupt:
        scheduler.shutdown()
        console.print("\n[yellow]Pending reminders cancelled.[/yellow]")


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
