"""
Constants
Run statuses, outcome identifiers and GitHub API details shared by all layers.
"""
from typing import Literal

VERSION = "1.0.0"

API_VERSION = "2022-11-28"
ACCEPT_HEADER = "application/vnd.github+json"
USER_AGENT = f"cancel-queued-runs/{VERSION}"
MAX_PER_PAGE = 100

# Run lifecycle as reported by the Actions API
CANCELABLE_STATUSES = ("queued", "in_progress")
PRE_QUEUE_STATUSES = ("requested", "waiting", "pending")
COMPLETED_STATUS = "completed"

# HTTP codes the cancel / delete endpoints answer with
CANCEL_ACCEPTED = 202
CANCEL_CONFLICT = 409
DELETE_OK = 204

PollResult = Literal["cancelable", "completed", "timeout"]

OutcomeAction = Literal[
    "would_cancel",
    "cancel_accepted",
    "cancel_failed",
    "conflict",
    "deleted",
    "delete_failed",
    "not_cancelable",
    "poll_timeout",
    "completed_while_waiting",
    "error",
]

FAILURE_ACTIONS = ("cancel_failed", "delete_failed", "error")
