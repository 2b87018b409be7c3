"""
Run Poller
==========
Watches a run that is still in a pre-queue state (requested / waiting /
pending) until it becomes cancelable, completes, or the polling window
closes.

Fixed-interval blocking sleep; the number of checks never exceeds
ceil(max_wait / poll_interval).
"""
import logging
import time

from run_canceller.core import config
from run_canceller.core.constants import CANCELABLE_STATUSES, COMPLETED_STATUS, PollResult
from run_canceller.core.output_formatter import format_poll_check
from run_canceller.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


class RunPoller:
    """
    Re-fetches a single run on a fixed interval until it can be cancelled.
    """

    def __init__(
        self,
        client: GitHubClient,
        max_wait: int = config.CANCEL_MAX_WAIT,
        poll_interval: int = config.CANCEL_POLL_INTERVAL,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.client = client
        self.max_wait = max_wait
        self.poll_interval = poll_interval

    def wait_until_cancelable(self, run_id: int) -> PollResult:
        waited = 0
        while waited < self.max_wait:
            time.sleep(self.poll_interval)
            waited += self.poll_interval

            status = self.client.get_run_status(run_id) or "null"
            print(format_poll_check(waited, status))

            if status in CANCELABLE_STATUSES:
                logger.debug("Run %s became %s after %ds", run_id, status, waited)
                return "cancelable"
            if status == COMPLETED_STATUS:
                return "completed"

        logger.debug("Run %s still not queued after %ds", run_id, waited)
        return "timeout"
