"""Cadence CLI - recurring task and template scheduler."""

import json
import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.cron import cron_matches_date, validate_cron_expression
from .core.dates import parse_iso_date
from .errors import CadenceError
from .workflows import (
    complete_task,
    generate_recurring_tasks,
    get_stores,
    instantiate_template,
    run_cron,
    today_utc,
)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


def _fail(e: CadenceError, as_json: bool) -> None:
    """Report an engine error and exit non-zero."""
    if as_json:
        click.echo(json.dumps({"error": e.kind, "message": str(e)}, indent=2), err=True)
    else:
        click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _parse_date_option(value: str | None) -> date:
    if not value:
        return today_utc()
    try:
        return parse_iso_date(value)
    except CadenceError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.version_option(package_name="cadence")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Cadence - recurring task and template scheduler."""
    config = load_config()
    _setup_logging("DEBUG" if debug else config.log_level)
    ctx.obj = config


@main.command("run-cron")
@click.option("--date", "-d", "target_date", default=None,
              help="Date to evaluate (YYYY-MM-DD), defaults to today (UTC)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def run_cron_cmd(config, target_date: str | None, as_json: bool):
    """Create bundles for automatic templates due today."""
    now = _parse_date_option(target_date)
    try:
        result = run_cron(get_stores(config), now)
    except CadenceError as e:
        _fail(e, as_json)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"Created: {len(result.created)} bundles")
    click.echo(f"Skipped: {result.skipped} (duplicates)")
    for bundle_id in result.created:
        click.echo(f"  {bundle_id}")


@main.command()
@click.argument("start_date")
@click.argument("end_date")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def generate(config, start_date: str, end_date: str, as_json: bool):
    """Generate recurring tasks from START_DATE to END_DATE (inclusive)."""
    try:
        result = generate_recurring_tasks(get_stores(config), start_date, end_date)
    except CadenceError as e:
        _fail(e, as_json)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.generated:
        click.echo(f"No new recurring tasks ({result.skipped} already existed).")
        return

    for task in result.generated:
        click.echo(f"{task.date.isoformat()}  {task.description}")
    click.echo(f"\nGenerated: {len(result.generated)}, skipped: {result.skipped}")


@main.command()
@click.argument("template_id")
@click.argument("bundle_id")
@click.argument("anchor_date")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def instantiate(config, template_id: str, bundle_id: str, anchor_date: str, as_json: bool):
    """Create a template's tasks for BUNDLE_ID anchored at ANCHOR_DATE."""
    try:
        tasks = instantiate_template(get_stores(config), template_id, bundle_id, anchor_date)
    except CadenceError as e:
        _fail(e, as_json)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    for task in tasks:
        marker = "*" if task.is_milestone else " "
        click.echo(f"[{marker}] {task.date.isoformat()}  {task.description} ({task.template_task_ref})")


@main.command()
@click.argument("task_id")
@click.pass_obj
def complete(config, task_id: str):
    """Mark a task done, advancing its bundle's stage if configured."""
    try:
        task = complete_task(get_stores(config), task_id)
    except CadenceError as e:
        _fail(e, False)

    click.echo(f"✓ {task.description}")


@main.command("check-cron")
@click.argument("expression")
@click.option("--date", "-d", "target_date", default=None,
              help="Date to evaluate (YYYY-MM-DD), defaults to today (UTC)")
def check_cron(expression: str, target_date: str | None):
    """Validate a cron EXPRESSION and show whether it fires on a date."""
    day = _parse_date_option(target_date)
    try:
        validate_cron_expression(expression)
    except CadenceError as e:
        _fail(e, False)

    fires = cron_matches_date(expression, day)
    click.echo(f"{expression!r} {'fires' if fires else 'does not fire'} on {day.isoformat()} ({day.strftime('%A')})")


@main.command()
@click.pass_obj
def serve(config):
    """Run the daily scheduler."""
    from .scheduler import run_scheduler

    click.echo(f"Starting Cadence scheduler (daily at {config.daily_run_time} {config.timezone})...")
    click.echo("Press Ctrl+C to stop")
    try:
        run_scheduler(config)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nScheduler stopped.")


if __name__ == "__main__":
    main()
