"""Publish run state machine using transitions library.

The publish flow is strictly linear. Each step that succeeds fires the
trigger that moves the run to its next state; any failure fires `fail`.

Usage:
    from branchpub.workflow.fsm import PublishFSM

    fsm = PublishFSM("gh-pages")
    fsm.check_passed()   # start -> requirements_checked
    fsm.enter_directory()
    ...
    fsm.finish()         # -> done
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)


STATES = [
    "start",
    "requirements_checked",
    "directory_entered",
    "repo_initialized",
    "branch_initialized",
    "synced",
    "committed",
    "pushed",
    "done",
    "failed",
]

TERMINAL_STATES = {"done", "failed"}

# Transitions defined as (trigger, source, dest)
# Each trigger becomes a method on the FSM
TRANSITIONS = [
    {"trigger": "check_passed", "source": "start", "dest": "requirements_checked"},
    {"trigger": "enter_directory", "source": "requirements_checked", "dest": "directory_entered"},
    {"trigger": "repo_ready", "source": "directory_entered", "dest": "repo_initialized"},
    {"trigger": "branch_ready", "source": "repo_initialized", "dest": "branch_initialized"},
    {"trigger": "sync_done", "source": "branch_initialized", "dest": "synced"},
    {"trigger": "commit_done", "source": "synced", "dest": "committed"},
    {"trigger": "push_done", "source": "committed", "dest": "pushed"},

    # Nothing requested after sync, no push requested after commit, or pushed
    {"trigger": "finish", "source": ["synced", "committed", "pushed"], "dest": "done"},

    # Any step may fail; terminal states are final
    {"trigger": "fail", "source": [s for s in STATES if s not in TERMINAL_STATES], "dest": "failed"},
]


class PublishFSM:
    """State machine for one publish run.

    Wraps the transitions library:
    - Only explicit transitions are allowed
    - Every transition is logged and kept in history
    """

    def __init__(self, branch: str = "", on_transition: Callable[[str, str, str], None] | None = None):
        """Initialize FSM for a run.

        Args:
            branch: Target branch, used to label log lines
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        self.branch = branch
        self.on_transition = on_transition
        self.history: list[tuple[str, str, str]] = []

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="start",
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",  # Callback after any transition
        )

    def on_state_change(self, event) -> None:
        """Callback after any state transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.debug(f"[FSM] {self.branch}: {from_state} -> {to_state} ({trigger})")
        self.history.append((from_state, to_state, trigger))

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)
