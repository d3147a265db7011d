import pytest

from lifecycle.errors import InvalidTransition
from lifecycle.transitions import (
    DELIVERY_MACHINE,
    JOB_CARD_MACHINE,
    LEAVE_MACHINE,
    LOAN_MACHINE,
    machine,
)


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (None, "pending", True),
        (None, "approved", False),
        ("pending", "approved", True),
        ("pending", "rejected", True),
        ("pending", "disbursed", False),
        ("approved", "disbursed", True),
        ("approved", "rejected", False),
        ("disbursed", "approved", False),
        ("rejected", "approved", False),
        ("disbursed", "disbursed", True),
    ],
)
def test_loan_edges(current, target, allowed):
    assert LOAN_MACHINE.allows(current, target) is allowed


def test_job_card_moves_forward_one_step_at_a_time():
    assert JOB_CARD_MACHINE.allows("open", "in_progress")
    assert JOB_CARD_MACHINE.allows("in_progress", "completed")
    assert JOB_CARD_MACHINE.allows("completed", "closed")
    assert not JOB_CARD_MACHINE.allows("open", "completed")
    assert not JOB_CARD_MACHINE.allows("closed", "open")
    assert JOB_CARD_MACHINE.next_states("open") == ["in_progress"]


def test_enter_raises_typed_error():
    with pytest.raises(InvalidTransition) as excinfo:
        LOAN_MACHINE.enter("pending", "disbursed", {})
    assert excinfo.value.code == "INVALID_TRANSITION"
    assert excinfo.value.status_code == 400


def test_new_records_must_start_in_an_initial_state():
    with pytest.raises(InvalidTransition):
        LEAVE_MACHINE.enter(None, "approved", {})
    DELIVERY_MACHINE.enter(None, "in_progress", {})


def test_delivery_completion_requires_all_clearances():
    state = {"rto_status": "completed", "insurance_status": "in-progress", "qc_status": "completed"}
    with pytest.raises(InvalidTransition) as excinfo:
        DELIVERY_MACHINE.enter("ready", "completed", state)
    assert "insurance" in excinfo.value.message

    state["insurance_status"] = "completed"
    DELIVERY_MACHINE.enter("ready", "completed", state)


def test_guards_hold_while_status_is_unchanged():
    done = {"rto_status": "completed", "insurance_status": "completed", "qc_status": "completed"}
    DELIVERY_MACHINE.enter("completed", "completed", done)

    with pytest.raises(InvalidTransition) as excinfo:
        DELIVERY_MACHINE.enter("completed", "completed", {**done, "rto_status": "pending"})
    assert "RTO" in excinfo.value.message


def test_leave_can_be_cancelled_after_approval():
    assert LEAVE_MACHINE.allows("approved", "cancelled")
    assert not LEAVE_MACHINE.allows("rejected", "approved")


def test_custom_machine_guard_message_is_used():
    gated = machine(
        initial=["a"],
        edges={"a": ["b"]},
        guards={"b": lambda state: None if state.get("ok") else "not ready"},
    )
    with pytest.raises(InvalidTransition) as excinfo:
        gated.enter("a", "b", {})
    assert excinfo.value.message == "not ready"
    gated.enter("a", "b", {"ok": True})
