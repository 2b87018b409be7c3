"""
Run Outcome Models
==================
Pydantic models recording what a cancel pass did.

Fields (RunOutcome):
    run_id          — numeric Actions run id
    action          — one of OutcomeAction (see core/constants.py)
    status          — run status at decision time ("null" when missing)
    cancel_status   — HTTP code of the cancel request (None when not sent)
    delete_status   — HTTP code of the DELETE fallback (None when not sent)
    message         — response body or error text, empty when none

CancelSummary aggregates every outcome of one invocation.
"""
from collections import Counter
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from run_canceller.core.constants import FAILURE_ACTIONS, OutcomeAction


class RunOutcome(BaseModel):
    run_id: int
    action: OutcomeAction
    status: str = "null"
    cancel_status: Optional[int] = None
    delete_status: Optional[int] = None
    message: str = ""


class CancelSummary(BaseModel):
    repository: str
    dry_run: bool = True
    force_delete: bool = False
    total_count: int = 0
    outcomes: List[RunOutcome] = Field(default_factory=list)

    def add(self, outcome: RunOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def counts(self) -> Dict[str, int]:
        return dict(Counter(o.action for o in self.outcomes))

    @property
    def has_failures(self) -> bool:
        return any(o.action in FAILURE_ACTIONS for o in self.outcomes)
