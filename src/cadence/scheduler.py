"""Daily scheduler for the bundle runner and recurring generation."""

import logging
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import Config, load_config
from .errors import CadenceError
from .workflows import Stores, daily_pass, get_stores

logger = logging.getLogger(__name__)


def local_today(config: Config, now: datetime | None = None) -> date:
    """The calendar day in the configured timezone, matching when the job fires."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(ZoneInfo(config.timezone or "UTC")).date()


def run_daily_pass(stores: Stores, config: Config, now: datetime | None = None) -> None:
    """Scheduled job body. Engine errors are logged so the scheduler keeps running."""
    today = local_today(config, now)
    logger.info(f"Starting daily pass for {today}")
    try:
        cron_result, generation = daily_pass(stores, config, today)
    except CadenceError as e:
        logger.error(f"Daily pass failed ({e.kind}): {e}")
        return
    logger.info(
        f"Daily pass done: {len(cron_result.created)} bundles created, "
        f"{len(generation.generated)} recurring tasks generated"
    )


def setup_scheduler(config: Config | None = None, stores: Stores | None = None) -> BlockingScheduler:
    """Set up the once-a-day job."""
    if config is None:
        config = load_config()
    if stores is None:
        stores = get_stores(config)

    scheduler = BlockingScheduler(timezone=config.timezone or "UTC")

    try:
        hour, minute = map(int, config.daily_run_time.split(":"))
    except ValueError:
        raise ValueError(f"Invalid DAILY_RUN_TIME format: {config.daily_run_time!r} (expected HH:MM)") from None

    scheduler.add_job(
        run_daily_pass,
        CronTrigger(hour=hour, minute=minute),
        args=[stores, config],
        id="daily_pass",
        coalesce=True,
        max_instances=1,
    )
    logger.info(f"Scheduled daily pass at {hour:02d}:{minute:02d} {config.timezone}")
    return scheduler


def run_scheduler(config: Config | None = None) -> None:
    """Run the scheduler until interrupted."""
    if config is None:
        config = load_config()
    stores = get_stores(config)
    scheduler = setup_scheduler(config, stores)
    logger.info("Starting Cadence scheduler...")
    try:
        scheduler.start()
    finally:
        stores.close()
