# coolblocks/state.py
"""
Application state
One struct owns the displayed lookup outcome, the plan and the lookup status.
All writes go through the methods below.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from coolblocks.errors import SEARCH_FAILED_MESSAGE, LookupFailed, LookupInProgress
from coolblocks.models import LookupOutcome, LookupStatus, MitigationAction, Plan

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    outcome: Optional[LookupOutcome] = None
    plan: Plan = field(default_factory=Plan)
    status: LookupStatus = LookupStatus.IDLE
    error: Optional[str] = None

    @property
    def is_searching(self) -> bool:
        return self.status == LookupStatus.SEARCHING

    def begin_lookup(self):
        if self.is_searching:
            raise LookupInProgress("A lookup is already running")
        self.status = LookupStatus.SEARCHING
        self.error = None

    def finish_lookup(self, outcome: LookupOutcome):
        self.outcome = outcome
        self.status = LookupStatus.SUCCESS

    def fail_lookup(self, message: str):
        # Previous outcome stays on screen
        self.error = message
        self.status = LookupStatus.FAILED

    def submit(self, query: str, orchestrator) -> Optional[LookupOutcome]:
        """
        Run a lookup and record its result

        Blank queries are ignored. Failures are recorded in `error`
        and do not touch the displayed outcome.
        """
        if not query or not query.strip():
            return None
        self.begin_lookup()
        return self.run_lookup(query, orchestrator)

    def run_lookup(self, query: str, orchestrator) -> Optional[LookupOutcome]:
        """Second half of submit(), for callers that mark Searching first"""
        if not self.is_searching:
            raise RuntimeError("run_lookup() called without begin_lookup()")
        try:
            outcome = orchestrator.run(query)
        except LookupFailed as e:
            logger.warning(f"Lookup for {query!r} failed: {e}")
            self.fail_lookup(e.user_message)
            return None
        except Exception:
            logger.exception(f"Lookup for {query!r} failed unexpectedly")
            self.fail_lookup(SEARCH_FAILED_MESSAGE)
            return None
        self.finish_lookup(outcome)
        return outcome

    def add_action(self, action: MitigationAction) -> Plan:
        self.plan = self.plan.add(action)
        return self.plan
