"""
Run Canceller
=============
Walks the workflow runs of one repository and cancels those that are
queued or in progress.

Per run:
    queued / in_progress            → cancel (or report, in dry-run)
    requested / waiting / pending   → poll via RunPoller, then cancel if it queued
    anything else                   → skip

Cancel answers:
    202 → accepted
    409 → not cancelable right now; DELETE the run when force_delete is set
    *   → failed

Dry-run is the default and never sends a mutating request. Polling still
issues read-only GETs in dry-run.
"""
import logging
from typing import Any, Optional, Set

from pydantic import ValidationError

from run_canceller.agents.run_poller import RunPoller
from run_canceller.core import config, output_formatter as fmt
from run_canceller.core.constants import CANCEL_ACCEPTED, CANCEL_CONFLICT, DELETE_OK
from run_canceller.models.run_outcome import CancelSummary, RunOutcome
from run_canceller.models.workflow_run import WorkflowRun
from run_canceller.services.github_client import GitHubAPIError, GitHubClient

logger = logging.getLogger(__name__)


class RunCanceller:
    """
    Agent that applies the cancel policy to every listed run of a repository.
    """

    def __init__(
        self,
        client: GitHubClient,
        dry_run: bool = True,
        force_delete: bool = False,
        poller: Optional[RunPoller] = None,
        per_page: int = config.RUNS_PER_PAGE,
        all_pages: bool = False,
    ) -> None:
        self.client = client
        self.dry_run = dry_run
        self.force_delete = force_delete
        self.poller = poller or RunPoller(client)
        self.per_page = per_page
        self.all_pages = all_pages

    def run(self) -> CancelSummary:
        """
        List runs and process each one. Listing failures propagate as
        GitHubAPIError; per-run failures are recorded in the summary.
        """
        summary = CancelSummary(
            repository=self.client.repo,
            dry_run=self.dry_run,
            force_delete=self.force_delete,
        )

        print(f"Fetching recent workflow runs for repo: {self.client.repo}...")
        if self.all_pages:
            total_count, payloads = self.client.list_all_runs(per_page=self.per_page)
        else:
            total_count, payloads = self.client.list_runs(per_page=self.per_page)
        summary.total_count = total_count

        if total_count == 0:
            print("No workflow runs found.")
            return summary

        print(fmt.format_found(total_count, self.per_page, self.all_pages))

        handled = set()
        for payload in payloads:
            outcome = self.process_payload(payload, handled)
            if outcome is not None:
                summary.add(outcome)

        print("Done.")
        for line in fmt.format_summary(summary.counts, self.dry_run):
            print(line)
        return summary

    def process_payload(self, payload: Any, handled: Optional[Set[int]] = None) -> Optional[RunOutcome]:
        """
        Validate one list entry and process it. Malformed entries and ids
        already in `handled` are skipped and yield None.
        """
        try:
            run = WorkflowRun.from_api(payload)
        except ValidationError as e:
            entry_id = payload.get("id") if isinstance(payload, dict) else None
            logger.warning("Skipping malformed run entry (id=%s): %s", entry_id, e)
            return None

        if handled is not None:
            if run.id in handled:
                logger.info("Run %s already handled in this pass; skipping", run.id)
                return None
            handled.add(run.id)
        return self.process_run(run)

    def process_run(self, run: WorkflowRun) -> RunOutcome:
        for line in fmt.format_run_block(run):
            print(line)

        if not run.is_cancelable:
            skipped = self._wait_for_queue(run)
            if skipped is not None:
                return skipped

        if self.dry_run:
            print(fmt.format_dry_run(run.id))
            return RunOutcome(run_id=run.id, action="would_cancel", status=run.status_label)

        try:
            return self._cancel(run)
        except GitHubAPIError as e:
            logger.error("Request for run %s failed: %s", run.id, e)
            return RunOutcome(run_id=run.id, action="error", status=run.status_label, message=str(e))

    def _wait_for_queue(self, run: WorkflowRun) -> Optional[RunOutcome]:
        """Returns a skip outcome, or None when the run became cancelable."""
        status = run.status_label
        if not run.is_pre_queue:
            print(fmt.format_not_cancelable(status))
            return RunOutcome(run_id=run.id, action="not_cancelable", status=status)

        print(fmt.format_poll_start(status, self.poller.max_wait))
        result = self.poller.wait_until_cancelable(run.id)

        if result == "completed":
            print("    run completed while waiting; skipping.")
            return RunOutcome(run_id=run.id, action="completed_while_waiting", status=status)
        if result == "timeout":
            print(fmt.format_poll_timeout(run.id, self.poller.max_wait))
            return RunOutcome(run_id=run.id, action="poll_timeout", status=status)
        return None

    def _cancel(self, run: WorkflowRun) -> RunOutcome:
        print("  Sending cancel request...")
        response = self.client.cancel_run(run.id)
        print(fmt.format_http(response.status_code))
        if response.body:
            print(f"  Response body: {response.body}")

        outcome = RunOutcome(
            run_id=run.id,
            action="cancel_accepted",
            status=run.status_label,
            cancel_status=response.status_code,
            message=response.body,
        )

        if response.status_code == CANCEL_ACCEPTED:
            print("  Cancel accepted.")
            logger.info("Cancel accepted for run %s", run.id)
            return outcome

        if response.status_code != CANCEL_CONFLICT:
            print(fmt.format_cancel_failed(response.status_code))
            logger.warning("Cancel of run %s failed with HTTP %d", run.id, response.status_code)
            outcome.action = "cancel_failed"
            return outcome

        print(
            "  Server returned 409 (not cancelable right now). Message above may say: "
            "'Cannot cancel a workflow re-run that has not yet queued.'"
        )
        if not self.force_delete:
            print("  Not deleting (use --force-delete to allow deletion).")
            outcome.action = "conflict"
            return outcome

        print("  Attempting DELETE (admin required)...")
        try:
            deleted = self.client.delete_run(run.id)
        except GitHubAPIError as e:
            logger.error("DELETE for run %s failed: %s", run.id, e)
            outcome.action = "error"
            outcome.message = str(e)
            return outcome
        print(fmt.format_http(deleted.status_code, prefix="DELETE "))
        if deleted.body:
            print(f"  DELETE body: {deleted.body}")

        outcome.delete_status = deleted.status_code
        if deleted.status_code == DELETE_OK:
            print(f"  Deleted run {run.id}.")
            logger.info("Deleted run %s after cancel conflict", run.id)
            outcome.action = "deleted"
        else:
            print(f"  Delete failed (HTTP {deleted.status_code}). Check permissions or API messages.")
            logger.warning("Delete of run %s failed with HTTP %d", run.id, deleted.status_code)
            outcome.action = "delete_failed"
            outcome.message = deleted.body or outcome.message
        return outcome
