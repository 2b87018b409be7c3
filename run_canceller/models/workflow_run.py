"""
Workflow Run Model
==================
Pydantic model for one entry of the Actions "workflow runs" payload.

Only the fields needed to decide and report are kept; every other key in the
API payload is ignored. created_at is left as the raw API string so that the
console report shows exactly what GitHub returned.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel

from run_canceller.core.constants import CANCELABLE_STATUSES, PRE_QUEUE_STATUSES


class WorkflowRun(BaseModel):
    id: int
    name: Optional[str] = None
    head_branch: Optional[str] = None
    created_at: Optional[str] = None
    html_url: Optional[str] = None
    status: Optional[str] = None
    conclusion: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "WorkflowRun":
        return cls.model_validate(payload)

    @property
    def is_cancelable(self) -> bool:
        return self.status in CANCELABLE_STATUSES

    @property
    def is_pre_queue(self) -> bool:
        return self.status in PRE_QUEUE_STATUSES

    @property
    def status_label(self) -> str:
        return self.status or "null"

    @property
    def conclusion_label(self) -> str:
        return self.conclusion or "null"
