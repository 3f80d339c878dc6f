"""Worker process for scheduled jobs.

Runs an asyncio loop that wakes just after each local midnight and, on
January 1st, writes every employee's PTO carryover. Repeated runs on the same
day (a restart) skip employees whose carryover is already written.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from hours_tracker.config import get_settings
from hours_tracker.db import dispose_engine, get_session_factory
from hours_tracker.logging_config import configure_logging
from hours_tracker.schemas.auth import AuthContext
from hours_tracker.services import calendar
from hours_tracker.services.pto_status import process_year_end

logger = logging.getLogger(__name__)

# Wake slightly after midnight so the new date is already in effect.
MIDNIGHT_SLACK_SECONDS = 5

# Audit rows written by the worker carry this actor id.
SYSTEM_ACTOR = AuthContext(user_id=uuid.UUID(int=0), role="admin")


def is_year_end_day(today: date) -> bool:
    return today.month == 1 and today.day == 1


def seconds_until_next_day(now: datetime) -> float:
    """Seconds from ``now`` (timezone-aware) until just after the next local midnight."""
    midnight = datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)
    # Compare in UTC so a DST change during the night is accounted for.
    return (midnight.astimezone(UTC) - now.astimezone(UTC)).total_seconds() + MIDNIGHT_SLACK_SECONDS


async def run_daily_jobs(today: date) -> bool:
    """Run the jobs due on ``today``. Returns True when year-end carryover ran."""
    if not is_year_end_day(today):
        logger.debug("No scheduled jobs due on %s", today)
        return False

    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await process_year_end(session, SYSTEM_ACTOR, today.year)
    logger.info(
        "Year-end carryover into %d complete: employees=%d skipped=%d", today.year, result.total, result.skipped
    )
    return True


async def run_worker_loop() -> None:
    """Main worker loop; a failing run is logged and retried on the next tick."""
    zone = ZoneInfo(get_settings().timezone)
    logger.info("Worker started")
    try:
        while True:
            today = calendar.today()
            try:
                await run_daily_jobs(today)
            except Exception:
                logger.exception("Scheduled jobs failed for %s", today)
            delay = seconds_until_next_day(datetime.now(zone))
            logger.debug("Next check in %.0f seconds", delay)
            await asyncio.sleep(delay)
    finally:
        await dispose_engine()


def main() -> None:
    """Entry point for the worker process."""
    configure_logging(get_settings())
    asyncio.run(run_worker_loop())


if __name__ == "__main__":
    main()
