"""CLI entry point for ai-cert-dashboard.

Commands:
- serve-mock: Run the mock statistics backend
- dashboard: Fetch the certification dashboard
- cadre / expert: Print the domain tables
- filters: Print the filter options
"""

import asyncio
import json
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.table import Table

from ai_cert_dashboard import __version__
from ai_cert_dashboard.api import DashboardHTTPClient, StatisticsApi
from ai_cert_dashboard.config import Config, load_config
from ai_cert_dashboard.dashboard import DashboardService
from ai_cert_dashboard.logging import setup_logging

console = Console()

T = TypeVar("T")

config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to config.yaml file",
)
dept_option = click.option("--dept", default=None, help="Department code (default from config)")


@click.group()
@click.version_option(version=__version__, prog_name="ai-cert-dashboard")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """AI certification and appointment statistics dashboard.

    \b
    Quick Start:
        1. Start the mock backend: ai-cert-dashboard serve-mock
        2. Fetch the dashboard:    ai-cert-dashboard dashboard
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


def _load(config: Path | None) -> Config:
    try:
        return load_config(config)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] Invalid config: {e}")
        raise click.Abort() from e


def _run(ctx: click.Context, cfg: Config, action: Callable[[DashboardService], Awaitable[T]]) -> T:
    """Run one service call against the configured API."""

    async def runner() -> T:
        async with DashboardHTTPClient.from_config(cfg.api) as http_client:
            return await action(DashboardService(StatisticsApi(http_client)))

    try:
        return asyncio.run(runner())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise click.Abort() from None
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if ctx.obj.get("verbose"):
            import traceback

            console.print("\n[dim]Traceback:[/dim]")
            console.print(traceback.format_exc())
        raise click.Abort() from e


def _write_json(payload: dict[str, Any], output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"  ✓ {output}")


def _rows_table(title: str, rows: Sequence[Any], columns: Sequence[tuple[str, str]]) -> Table:
    """Render view-model rows; maturity rows are bold, category rows indented."""
    table = Table(title=title)
    table.add_column("Maturity")
    table.add_column("Job category")
    for header, _ in columns:
        table.add_column(header, justify="right")

    for row in rows:
        cells = [_format(getattr(row, field)) for _, field in columns]
        if row.is_maturity_row:
            table.add_row(f"[bold]{row.maturity_level}[/bold]", "", *cells)
        else:
            table.add_row("", f"  {row.job_category}", *cells)
    return table


def _format(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


EXPERT_CERT_COLUMNS = (("Baseline", "baseline"), ("Certified", "certified"), ("Rate %", "certification_rate"))
EXPERT_APPOINT_COLUMNS = (
    ("Baseline", "baseline"),
    ("Appointed", "appointed"),
    ("By requirement", "appointed_by_requirement"),
    ("Rate %", "appointment_rate"),
)
CADRE_CERT_COLUMNS = (
    ("Baseline", "baseline"),
    ("Certified", "ai_certificate_holders"),
    ("Subject 2", "subject_two_passed"),
    ("Rate %", "certificate_rate"),
    ("Subject 2 %", "subject_two_rate"),
    ("Compliance %", "compliance_rate"),
)
CADRE_APPOINT_COLUMNS = (
    ("Baseline", "baseline"),
    ("Appointed", "appointed"),
    ("By requirement", "appointed_by_requirement"),
    ("Rate %", "appointment_rate"),
    ("Compliance %", "certification_compliance"),
)


# ============================================================================
# COMMANDS
# ============================================================================


@main.command("serve-mock")
@config_option
@click.option("--host", default=None, help="Bind host (default from config)")
@click.option("--port", type=int, default=None, help="Bind port (default from config)")
def serve_mock(config: Path | None, host: str | None, port: int | None) -> None:
    """Run the mock statistics backend with uvicorn."""
    import uvicorn

    from ai_cert_dashboard.mock import create_app

    cfg = _load(config)
    host = host or cfg.mock.host
    port = port or cfg.mock.port

    console.print(f"[bold]Mock backend listening on http://{host}:{port}[/bold]")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


@main.command()
@config_option
@dept_option
@click.option("--role", default=None, help="Person type: 0 all, 1 cadre, 2 expert, 3 frontline manager")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the dashboard as JSON instead of printing tables",
)
@click.pass_context
def dashboard(ctx: click.Context, config: Path | None, dept: str | None, role: str | None, output: Path | None) -> None:
    """Fetch the certification dashboard."""
    cfg = _load(config)
    dept = dept or cfg.dashboard.dept_code
    role = role or cfg.dashboard.person_type

    result = _run(ctx, cfg, lambda service: service.fetch_certification_dashboard(dept, role))

    if output is not None:
        _write_json(result.to_payload(), output)
        return

    metrics = Table(title="Overview")
    metrics.add_column("Metric")
    metrics.add_column("Value", justify="right")
    for item in result.metrics:
        metrics.add_row(item.title, f"{_format(item.value)}{item.unit or ''}")
    console.print(metrics)
    console.print(_rows_table("Expert certification", result.expert_certification, EXPERT_CERT_COLUMNS))
    console.print(_rows_table("Expert appointment", result.expert_appointment, EXPERT_APPOINT_COLUMNS))
    console.print(_rows_table("Cadre certification", result.cadre_certification, CADRE_CERT_COLUMNS))
    console.print(_rows_table("Cadre appointment", result.cadre_appointment, CADRE_APPOINT_COLUMNS))


@main.command()
@config_option
@dept_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of tables")
@click.pass_context
def cadre(ctx: click.Context, config: Path | None, dept: str | None, as_json: bool) -> None:
    """Print the cadre certification and appointment tables."""
    cfg = _load(config)
    result = _run(ctx, cfg, lambda service: service.fetch_cadre_dashboard(dept or cfg.dashboard.dept_code))

    if as_json:
        _write_json(result.to_payload(), None)
        return

    console.print(_rows_table("Cadre certification", result.certification, CADRE_CERT_COLUMNS))
    console.print(_rows_table("Cadre appointment", result.appointment, CADRE_APPOINT_COLUMNS))

    overview = Table(title="Cadre AI appointment overview")
    for header in ("Department", "Cadres", "L2/L3", "Meets requirement", "Rate %"):
        overview.add_column(header)
    for row in result.overview:
        is_total = not (row.is_level3 or row.is_level4)
        name = f"  {row.department}" if row.is_level4 else row.department
        overview.add_row(
            f"[bold]{name}[/bold]" if is_total else name,
            _format(row.total_cadre_count),
            _format(row.l2_l3_count),
            _format(row.meet_requirement_l2_l3_count),
            _format(row.meet_requirement_l2_l3_rate),
        )
    console.print(overview)


@main.command()
@config_option
@dept_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of tables")
@click.pass_context
def expert(ctx: click.Context, config: Path | None, dept: str | None, as_json: bool) -> None:
    """Print the expert certification and appointment tables."""
    cfg = _load(config)
    result = _run(ctx, cfg, lambda service: service.fetch_expert_dashboard(dept or cfg.dashboard.dept_code))

    if as_json:
        _write_json(result.to_payload(), None)
        return

    console.print(_rows_table("Expert certification", result.certification, EXPERT_CERT_COLUMNS))
    console.print(_rows_table("Expert appointment", result.appointment, EXPERT_APPOINT_COLUMNS))


@main.command()
@config_option
@click.option("--refresh", is_flag=True, default=False, help="Bypass the department cache")
@click.pass_context
def filters(ctx: click.Context, config: Path | None, refresh: bool) -> None:
    """Print the department tree, role and maturity options as JSON."""
    cfg = _load(config)
    result = _run(ctx, cfg, lambda service: service.fetch_filter_options(force_refresh=refresh))
    _write_json(result.to_payload(), None)


if __name__ == "__main__":
    main()
