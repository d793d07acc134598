"""
CLI for the Production Tracker.

Usage:
    production-tracker analyze snapshot.json
    production-tracker review snapshot.json --status pending --status flagged
    production-tracker eac snapshot.json 03-3100
    production-tracker reverse snapshot.json 03-3100 5500
    production-tracker closeout snapshot.json
    production-tracker drawdown snapshot.json 03-3100 120
    production-tracker stale snapshot.json
    production-tracker validate snapshot.json

Commands:
    analyze   Budget vs. actual analysis for every assembly
    review    Reviewer true-up cards, most urgent first
    eac       Component rollup and EAC for one assembly
    reverse   Production rate implied by a target ECAC
    closeout  Final production rates per provisional code
    drawdown  Material drawdown for an installed quantity
    stale     Codes whose claiming progress was not re-reported
    validate  Structural checks on a snapshot
"""
import logging
from pathlib import Path

import click
import pandas as pd

from production_tracker import __version__
from production_tracker.config import ConfigurationError, ProductionConfig
from production_tracker.data import SnapshotLoader
from production_tracker.domain.entities import TrueUpStatus
from production_tracker.domain.exceptions import AssemblyNotFoundError, DomainError
from production_tracker.domain.services import SnapshotValidationService
from production_tracker.engine import (
    Policy,
    aggregate_events,
    analyze_snapshot,
    build_review_row,
    build_review_rows,
    calc_assembly_eac,
    calc_closeout_rates,
    calc_inline_ecac,
    calc_material_drawdown,
    calc_reverse_for_review,
    effective_totals,
    generate_component_narrative,
    generate_eac_narrative,
    is_claiming_stale,
    summarize_review,
)
from production_tracker.reports import (
    analysis_frame,
    closeout_frame,
    component_frame,
    format_currency,
    review_frame,
)

logger = logging.getLogger(__name__)


def _echo_frame(df: pd.DataFrame) -> None:
    if df.empty:
        click.echo("(no rows)")
        return
    with pd.option_context('display.max_columns', None, 'display.width', 200):
        click.echo(df.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))


def _load(snapshot_path: str):
    try:
        return SnapshotLoader().load_json(snapshot_path)
    except DomainError as e:
        raise click.ClickException(e.message)


def _require_assembly(snapshot, wbs_code: str):
    assembly = snapshot.get_assembly(wbs_code)
    if assembly is None:
        raise click.ClickException(AssemblyNotFoundError(wbs_code).message)
    return assembly


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--config',
    'config_path',
    default=None,
    help='Path to production_config.yaml',
    type=click.Path(exists=True, dir_okay=False)
)
@click.pass_context
def cli(ctx: click.Context, config_path: str):
    """Production Tracker CLI.

    Earned-value, performance factor and cost-at-completion reports
    for construction field production.
    """
    try:
        config = ProductionConfig(Path(config_path) if config_path else None)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=config.log_format,
    )
    ctx.obj = {
        'config': config,
        'policy': Policy.from_config(config),
    }


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def analyze(ctx: click.Context, snapshot_path: str):
    """Budget vs. actual analysis for every assembly."""
    snapshot = _load(snapshot_path)
    rows = analyze_snapshot(snapshot, ctx.obj['policy'])
    _echo_frame(analysis_frame(rows))


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--status',
    'statuses',
    multiple=True,
    type=click.Choice([s.value for s in TrueUpStatus]),
    help='Only show codes with this true-up status (repeatable)'
)
@click.pass_context
def review(ctx: click.Context, snapshot_path: str, statuses):
    """Reviewer true-up cards, most urgent first."""
    snapshot = _load(snapshot_path)
    status_filter = [TrueUpStatus(s) for s in statuses] if statuses else None
    rows = build_review_rows(snapshot, status_filter, ctx.obj['policy'])
    _echo_frame(review_frame(rows))

    currency = ctx.obj['config'].currency_config
    summary = summarize_review(build_review_rows(snapshot, policy=ctx.obj['policy']))
    click.echo("")
    click.echo(f"Budget:  {format_currency(summary.total_budget, currency)}")
    click.echo(f"ECAC:    {format_currency(summary.total_ecac, currency)}")
    click.echo(f"Reviewed {summary.reviewed}/{summary.total}, flagged {summary.flagged}")
    if summary.has_data:
        click.echo(f"Overall PF: {summary.overall_pf:.2f}")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('wbs_code')
@click.pass_context
def eac(ctx: click.Context, snapshot_path: str, wbs_code: str):
    """Component rollup and EAC for one assembly."""
    snapshot = _load(snapshot_path)
    assembly = _require_assembly(snapshot, wbs_code)
    policy = ctx.obj['policy']

    totals = aggregate_events(snapshot.production_events, wbs_code)
    actual_qty, actual_hours = effective_totals(totals, snapshot.get_override(wbs_code))

    forecast = calc_inline_ecac(
        assembly.budgeted_qty, actual_qty,
        assembly.budgeted_hours, actual_hours,
        assembly.blended_unit_cost,
    )
    currency = ctx.obj['config'].currency_config
    click.echo(f"{assembly.wbs_code}  {assembly.description}")
    click.echo(f"ECAC: {format_currency(forecast.ecac, currency)}  "
               f"current rate {forecast.current_rate:.3f} {assembly.uom}/hr, "
               f"required {forecast.required_rate:.3f} {assembly.uom}/hr")

    if not assembly.has_components:
        return

    rollup = calc_assembly_eac(assembly, actual_hours, policy)
    click.echo("")
    _echo_frame(component_frame(rollup))
    click.echo("")
    for projection in rollup.components:
        click.echo(generate_component_narrative(projection.analysis, actual_hours))
    click.echo(generate_eac_narrative(rollup, assembly, policy.narrative_tolerance_hours))


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('wbs_code')
@click.argument('target_ecac', type=float)
@click.pass_context
def reverse(ctx: click.Context, snapshot_path: str, wbs_code: str, target_ecac: float):
    """Production rate implied by a target ECAC."""
    snapshot = _load(snapshot_path)
    assembly = _require_assembly(snapshot, wbs_code)
    row = build_review_row(snapshot, assembly, ctx.obj['policy'])
    result = calc_reverse_for_review(row, target_ecac)
    if result is None:
        raise click.ClickException(f"No field quantity recorded for '{wbs_code}' yet")

    click.echo(f"Remaining qty:   {result.remaining_qty:,.2f} {assembly.uom}")
    click.echo(f"Remaining hours: {result.remaining_hours:,.2f}")
    click.echo(f"Required rate:   {result.required_rate:.3f} {assembly.uom}/hr")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def closeout(ctx: click.Context, snapshot_path: str):
    """Final production rates (MH/unit) per provisional code."""
    snapshot = _load(snapshot_path)
    _echo_frame(closeout_frame(calc_closeout_rates(snapshot)))


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('wbs_code')
@click.argument('units_installed', type=float)
@click.pass_context
def drawdown(ctx: click.Context, snapshot_path: str, wbs_code: str, units_installed: float):
    """Material drawdown for an installed quantity."""
    snapshot = _load(snapshot_path)
    assembly = _require_assembly(snapshot, wbs_code)
    draws = calc_material_drawdown(
        assembly, units_installed, decimals=ctx.obj['policy'].drawdown_decimals
    )
    if not draws:
        click.echo("No materials drawn.")
        return
    for draw in draws:
        click.echo(f"{draw.item}: {draw.qty:g}")


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def stale(ctx: click.Context, snapshot_path: str):
    """Codes whose claiming progress was not re-reported."""
    snapshot = _load(snapshot_path)
    stale_codes = [
        a.wbs_code for a in snapshot.assemblies
        if snapshot.schema_for(a) is not None
        and is_claiming_stale(snapshot.production_events, a.wbs_code)
    ]
    if not stale_codes:
        click.echo("No stale claiming progress.")
        return
    for code in stale_codes:
        click.echo(code)


@cli.command()
@click.argument('snapshot_path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate(ctx: click.Context, snapshot_path: str):
    """Structural checks on a snapshot."""
    snapshot = _load(snapshot_path)
    errors, warnings = SnapshotValidationService(snapshot).validate()
    for warning in warnings:
        click.echo(f"WARNING: {warning}")
    for error in errors:
        click.echo(f"ERROR: {error}")
    if errors:
        raise click.ClickException(f"{len(errors)} structural error(s)")
    click.echo("Snapshot is valid.")


if __name__ == '__main__':
    cli()
