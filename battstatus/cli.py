from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import build_config, resolve_lifetime_span
from .decision import Report
from .monitor import Monitor
from .source import TraceSource, watch

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


@app.callback()
def main_callback() -> None:
    """Inspect battery status change decisions."""


@app.command("replay")
def replay_command(
    trace: Path = typer.Argument(..., help="JSON-lines trace of raw power status records"),
    lifetime_span: Optional[int] = typer.Option(
        None,
        "--lifetime-span",
        help="Minutes of lifetime to average, 0 disables (or set BATTSTATUS_LIFETIME_SPAN)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging and full status comparison"
    ),
    show_all: bool = typer.Option(
        False, "--all", help="List every tick, not only ticks that changed something"
    ),
) -> None:
    """Replay a recorded trace and show what would have been reported."""
    configure_logging(verbose)

    if not trace.is_file():
        console.print(f"Trace not found: {trace}")
        raise typer.Exit(code=1)

    try:
        config = build_config(
            lifetime_span_minutes=resolve_lifetime_span(lifetime_span),
            verbose=verbose,
        )
    except ValueError as exc:
        console.print(f"Invalid configuration: {exc}")
        raise typer.Exit(code=1)

    reports = list(watch(TraceSource(trace), Monitor(config), interval=0))
    if not reports:
        console.print("No records in trace.")
        raise typer.Exit(code=1)

    shown = reports if show_all else [r for r in reports if r.changed]
    console.print(_reports_table(shown, title=f"{trace.name}: {len(reports)} ticks"))


def _format_optional(value: Optional[int], suffix: str = "") -> str:
    return f"{value}{suffix}" if value is not None else "--"


def _format_flags(report: Report) -> str:
    flags = []
    if report.suppress_charge_state:
        flags.append("charge")
    if report.suppress_lifetime:
        flags.append("lifetime")
    return ",".join(flags) or "--"


def _reports_table(reports: Iterable[Report], *, title: str) -> Table:
    table = Table(
        title=title,
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    table.add_column("Tick", justify="right")
    table.add_column("Status", no_wrap=True)
    table.add_column("Percent", justify="right")
    table.add_column("Lifetime s", justify="right")
    table.add_column("Saver", no_wrap=True)
    table.add_column("Notices")
    table.add_column("Suppressed", no_wrap=True)

    for report in reports:
        status = report.status
        saver = "--"
        if report.battery_saver is not None:
            saver = "on" if report.battery_saver else "off"
        table.add_row(
            f"{report.sample.timestamp:.1f}",
            status.category.value if status else "--",
            _format_optional(status.percent if status else None, "%"),
            _format_optional(status.seconds if status else None),
            saver,
            ", ".join(notice.value for notice in report.notices) or "--",
            _format_flags(report),
        )
    return table


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
