"""Server-side status state machines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

from models import DeliveryStatus, JobCardStatus, LeaveStatus, LoanStatus

from .errors import InvalidTransition

# A guard returns an error message when the merged row may not enter a state.
Guard = Callable[[Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class StateMachine:
    initial: frozenset[str]
    edges: Mapping[str, frozenset[str]]
    guards: Mapping[str, Guard] = field(default_factory=dict)

    def allows(self, current: str | None, target: str) -> bool:
        if current is None:
            return target in self.initial
        if current == target:
            return True
        return target in self.edges.get(current, frozenset())

    def enter(self, current: str | None, target: str, state: Mapping[str, Any]) -> None:
        """Raise :class:`InvalidTransition` unless ``current -> target`` is legal.

        Guards also run when ``current == target`` so a record cannot be
        edited out of the conditions its status depends on.
        """

        if not self.allows(current, target):
            if current is None:
                allowed = ", ".join(sorted(self.initial))
                raise InvalidTransition(f"New records must start in one of: {allowed}")
            raise InvalidTransition(f"Cannot change status from '{current}' to '{target}'")

        guard = self.guards.get(target)
        if guard is not None:
            problem = guard(state)
            if problem:
                raise InvalidTransition(problem)

    def next_states(self, current: str) -> list[str]:
        return sorted(self.edges.get(current, frozenset()))


def machine(initial: Iterable[str], edges: Mapping[str, Iterable[str]], guards=None) -> StateMachine:
    return StateMachine(
        initial=frozenset(initial),
        edges={source: frozenset(targets) for source, targets in edges.items()},
        guards=dict(guards or {}),
    )


def _delivery_clearances_done(state: Mapping[str, Any]) -> str | None:
    pending = [
        label
        for label, key in (("RTO", "rto_status"), ("insurance", "insurance_status"), ("QC", "qc_status"))
        if state.get(key) != "completed"
    ]
    if pending:
        return f"Delivery cannot be completed until {', '.join(pending)} status is completed"
    return None


LOAN_MACHINE = machine(
    initial=[LoanStatus.pending.value],
    edges={
        LoanStatus.pending.value: [LoanStatus.approved.value, LoanStatus.rejected.value],
        LoanStatus.approved.value: [LoanStatus.disbursed.value],
    },
)

JOB_CARD_MACHINE = machine(
    initial=[JobCardStatus.open.value],
    edges={
        JobCardStatus.open.value: [JobCardStatus.in_progress.value],
        JobCardStatus.in_progress.value: [JobCardStatus.completed.value],
        JobCardStatus.completed.value: [JobCardStatus.closed.value],
    },
)

DELIVERY_MACHINE = machine(
    initial=[DeliveryStatus.pending.value, DeliveryStatus.in_progress.value],
    edges={
        DeliveryStatus.pending.value: [
            DeliveryStatus.in_progress.value,
            DeliveryStatus.ready.value,
            DeliveryStatus.completed.value,
            DeliveryStatus.cancelled.value,
        ],
        DeliveryStatus.in_progress.value: [
            DeliveryStatus.ready.value,
            DeliveryStatus.completed.value,
            DeliveryStatus.cancelled.value,
        ],
        DeliveryStatus.ready.value: [DeliveryStatus.completed.value, DeliveryStatus.cancelled.value],
    },
    guards={DeliveryStatus.completed.value: _delivery_clearances_done},
)

LEAVE_MACHINE = machine(
    initial=[LeaveStatus.pending.value],
    edges={
        LeaveStatus.pending.value: [
            LeaveStatus.approved.value,
            LeaveStatus.rejected.value,
            LeaveStatus.cancelled.value,
        ],
        LeaveStatus.approved.value: [LeaveStatus.cancelled.value],
    },
)
