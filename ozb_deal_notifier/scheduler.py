"""
Job scheduling for the OzBargain Deal Notifier.

Jobs are an explicit list of (trigger, unit of work) pairs. Triggers are
APScheduler cron triggers evaluated in the schedule timezone. Each job has
a timer task that sleeps on an injectable clock until the trigger's next
fire time and then fires the job. Every firing runs in the default thread
pool executor as an independent task; firings of the same job may overlap.
"""

import asyncio
import functools
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Any, Callable, Dict, List, Optional, Set

from apscheduler.triggers.cron import CronTrigger

from .interfaces import IClock, ITrigger
from .models.config import TriggerConfig
from .utils.error_handling import ErrorCategory, ErrorSeverity, with_error_handling
from .utils.logging import get_logger


class SystemClock:
    """Timezone-aware wall-clock time and real asyncio sleeps."""

    def __init__(self, timezone: Optional[tzinfo] = None):
        self.timezone = timezone

    def now(self) -> datetime:
        if self.timezone is None:
            return datetime.now().astimezone()
        return datetime.now(self.timezone)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


def trigger_from_config(
    config: TriggerConfig, timezone: Optional[tzinfo] = None
) -> CronTrigger:
    """
    Build a cron trigger from its configuration.

    Daily triggers fire at ``hour:minute``. Interval triggers fire on the
    hour at every hour divisible by ``hours``, like a cron hour field of
    ``*/6``. Without a timezone the local zone is used.
    """
    config.validate()
    kwargs: Dict[str, Any] = {}
    if timezone is not None:
        kwargs["timezone"] = timezone

    if config.type == "daily":
        return CronTrigger(hour=config.hour, minute=config.minute, **kwargs)
    return CronTrigger(hour=f"*/{config.hours}", minute=0, **kwargs)


def seconds_until(target: datetime, now: datetime) -> float:
    """Real seconds between two aware datetimes, across UTC offset changes."""
    return target.timestamp() - now.timestamp()

@dataclass
class ScheduledJob:
    """A unit of work and the trigger that fires it."""

    name: str
    trigger: ITrigger
    run: Callable[[], Any]
    run_on_startup: bool = True


class DealScheduler:
    """Fires scheduled jobs on their triggers and once at startup."""

    def __init__(self, jobs: List[ScheduledJob], clock: Optional[IClock] = None):
        """
        Initialize the scheduler.

        Args:
            jobs: Jobs to schedule; names must be unique
            clock: Time source, SystemClock by default
        """
        self.jobs: Dict[str, ScheduledJob] = {}
        for job in jobs:
            if job.name in self.jobs:
                raise ValueError(f"Duplicate job name: {job.name}")
            self.jobs[job.name] = job

        self.clock = clock or SystemClock()
        self.is_running = False
        self.fire_counts: Dict[str, int] = {name: 0 for name in self.jobs}
        self._timer_tasks: List[asyncio.Task] = []
        self._in_flight: Dict[str, Set[asyncio.Task]] = {
            name: set() for name in self.jobs
        }
        self.logger = get_logger("scheduler")

    async def start(self) -> None:
        """Start the timer loops and fire startup runs without waiting on them."""
        if self.is_running:
            self.logger.warning("Scheduler is already running")
            return

        self.is_running = True

        for job in self.jobs.values():
            self._timer_tasks.append(
                asyncio.create_task(self._timer_loop(job), name=f"timer:{job.name}")
            )
            next_run = job.trigger.get_next_fire_time(None, self.clock.now())
            self.logger.info(
                f"Scheduled {job.name}: {job.trigger}",
                extra={"next_run": next_run.isoformat() if next_run else None},
            )

        startup_jobs = [job for job in self.jobs.values() if job.run_on_startup]
        if startup_jobs:
            self.logger.info("Running initial scrapes...")
        for job in startup_jobs:
            self.fire(job.name)

    async def stop(self, wait: bool = True) -> None:
        """
        Stop the timer loops.

        Args:
            wait: Also wait for firings that are still running
        """
        if not self.is_running:
            return

        self.is_running = False
        self.logger.info("Stopping scheduler")

        for task in self._timer_tasks:
            task.cancel()
        await asyncio.gather(*self._timer_tasks, return_exceptions=True)
        self._timer_tasks = []

        if wait:
            await self.wait_idle()

    def fire(self, job_name: str) -> asyncio.Task:
        """
        Run a job now as an independent task.

        Args:
            job_name: Name of the job to fire

        Returns:
            The task running the job
        """
        job = self.jobs[job_name]
        in_flight = self._in_flight[job_name]

        if in_flight:
            self.logger.warning(
                f"Previous {job_name} run still in progress, starting another",
                extra={"in_flight": len(in_flight)},
            )

        self.fire_counts[job_name] += 1
        task = asyncio.create_task(self._run_job(job), name=f"run:{job_name}")
        in_flight.add(task)
        task.add_done_callback(in_flight.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until no job firing is running."""
        while True:
            pending = [t for tasks in self._in_flight.values() for t in tasks]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def _timer_loop(self, job: ScheduledJob) -> None:
        last_fire: Optional[datetime] = None

        while self.is_running:
            now = self.clock.now()
            # Slots missed while asleep are skipped, and a slot never fires twice.
            search_from = now
            if last_fire is not None and seconds_until(last_fire, now) >= 0:
                search_from = last_fire + timedelta(microseconds=1)

            next_fire = job.trigger.get_next_fire_time(None, search_from)
            if next_fire is None:
                self.logger.warning(f"Trigger for {job.name} will never fire again")
                break

            delay = seconds_until(next_fire, now)
            self.logger.debug(
                f"Next {job.name} run at {next_fire.isoformat()}",
                extra={"delay_seconds": delay},
            )

            await self.clock.sleep(max(delay, 0.0))
            if not self.is_running:
                break

            last_fire = next_fire
            self.logger.info(f"Running scheduled {job.name} scrape...")
            self.fire(job.name)

    async def _run_job(self, job: ScheduledJob) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, functools.partial(_execute_job, job))


@with_error_handling(
    component="scheduler",
    category=ErrorCategory.SYSTEM,
    severity=ErrorSeverity.HIGH,
    suppress_exceptions=True,
)
def _execute_job(job: ScheduledJob) -> Any:
    return job.run()
