"""
Output Formatter
================
Every line of the console report is built here so that wording stays
identical across the canceller, the poller and the CLI.

This module never performs I/O; callers print the returned strings.
"""
from typing import Dict, List

from run_canceller.models.workflow_run import WorkflowRun

SEPARATOR = "-" * 40

# Display order for the final summary
SUMMARY_LABELS = {
    "would_cancel": "Would cancel",
    "cancel_accepted": "Cancel accepted",
    "deleted": "Deleted",
    "conflict": "Conflict (409)",
    "cancel_failed": "Cancel failed",
    "delete_failed": "Delete failed",
    "not_cancelable": "Not cancelable",
    "poll_timeout": "Not queued in time",
    "completed_while_waiting": "Completed while waiting",
    "error": "Errors",
}


def format_run_block(run: WorkflowRun) -> List[str]:
    return [
        SEPARATOR,
        f"Run ID: {run.id}",
        f"  workflow:  {run.name}",
        f"  branch:    {run.head_branch}",
        f"  created:   {run.created_at}",
        f"  url:       {run.html_url}",
        f"  status:    {run.status_label}",
        f"  conclusion:{run.conclusion_label}",
    ]


def format_found(total_count: int, per_page: int, all_pages: bool = False) -> str:
    if all_pages:
        return f"Found {total_count} runs (all pages)."
    return f"Found {total_count} runs (first page up to {per_page})."


def format_poll_start(status: str, max_wait: int) -> str:
    return f"  Run is in pre-queue state ({status}). Polling up to {max_wait} seconds for queued/in_progress..."


def format_poll_check(waited: int, status: str) -> str:
    return f"    checked at +{waited}s: status={status}"


def format_poll_timeout(run_id: int, max_wait: int) -> str:
    return (
        f"  Not queued after {max_wait}s; skipping cancel for {run_id} "
        "(server will queue later or it's non-cancelable)."
    )


def format_not_cancelable(status: str) -> str:
    return f"  Run status '{status}' is not cancelable. Skipping."


def format_dry_run(run_id: int) -> str:
    return f"  Dry-run: would attempt cancel for run {run_id}"


def format_http(code, prefix: str = "") -> str:
    return f"  {prefix}HTTP {code}"


def format_cancel_failed(code) -> str:
    return (
        f"  Cancel failed with HTTP {code}. Check response above and consider "
        "contacting GitHub Support if you see 5xx errors."
    )


def format_summary(counts: Dict[str, int], dry_run: bool) -> List[str]:
    lines = [SEPARATOR, "Summary" + (" (dry-run, nothing was changed)" if dry_run else "")]
    for action, label in SUMMARY_LABELS.items():
        if counts.get(action):
            lines.append(f"  {label + ':':<25}{counts[action]}")
    if len(lines) == 2:
        lines.append("  No runs needed action.")
    return lines
