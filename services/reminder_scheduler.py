"""
services/reminder_scheduler.py
-------------------------------
Owns the periodic reminder recheck.

A single repeating job on the bot's JobQueue rebuilds the reminder list
every REMINDER_CHECK_INTERVAL, independently of store mutations. The job
is registered by start() and removed by stop(); running() pairs the two.
"""

from contextlib import contextmanager
from datetime import timedelta
from typing import Awaitable, Callable, Iterator, Optional

from apscheduler.jobstores.base import JobLookupError
from telegram.ext import ContextTypes, Job, JobQueue

from config import REMINDER_CHECK_INTERVAL
from models.notification import Notification
from services.tracker_service import SubscriptionTracker
from utils.logger import get_logger

logger = get_logger(__name__)

ReminderSink = Callable[[ContextTypes.DEFAULT_TYPE, list[Notification]], Awaitable[None]]


class ReminderScheduler:
    """
    Cancellable 24-hour reminder job.

    The first run happens as soon as the job queue starts. Changing the
    threshold on the tracker does not move the job's phase.

    Args:
        tracker: Tracker whose reminders are rebuilt on each run.
        on_reminders: Optional coroutine receiving the non-empty reminder list.
        interval: Time between runs.
    """

    JOB_NAME = "subscription_reminders"

    def __init__(
        self,
        tracker: SubscriptionTracker,
        on_reminders: Optional[ReminderSink] = None,
        interval: timedelta = REMINDER_CHECK_INTERVAL,
    ):
        self.tracker = tracker
        self.on_reminders = on_reminders
        self.interval = interval
        self._job: Optional[Job] = None

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def start(self, job_queue: JobQueue) -> None:
        """
        Register the repeating job.

        Raises:
            RuntimeError: If the scheduler is already running.
        """
        if self._job is not None:
            raise RuntimeError("Reminder scheduler is already running")
        self._job = job_queue.run_repeating(
            self.run_once,
            interval=self.interval,
            first=0,
            name=self.JOB_NAME,
        )
        logger.info(f"Scheduled reminder check every {self.interval}")

    def stop(self) -> None:
        """
        Remove the repeating job. No-op if not running.

        Safe to call after the job queue itself has shut down, which is the
        order Application.run_polling() tears things down in.
        """
        if self._job is None:
            return
        job, self._job = self._job, None
        try:
            job.schedule_removal()
        except JobLookupError:
            # The queue's scheduler already dropped its jobs on shutdown
            logger.debug("Reminder job was already gone from the job queue")
        logger.info("Reminder check stopped")

    @contextmanager
    def running(self, job_queue: JobQueue) -> Iterator["ReminderScheduler"]:
        """Run the scheduler for the duration of a ``with`` block."""
        self.start(job_queue)
        try:
            yield self
        finally:
            self.stop()

    async def run_once(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Job callback: rebuild reminders and hand them to the sink."""
        notifications = self.tracker.refresh_reminders()
        logger.info(f"Reminder check: {len(notifications)} payment(s) due soon")
        if notifications and self.on_reminders is not None:
            await self.on_reminders(context, notifications)
