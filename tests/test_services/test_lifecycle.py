import pytest
from datetime import datetime, timedelta
from types import SimpleNamespace
from choukwa.services import lifecycle
from choukwa.services.lifecycle import TransitionError


@pytest.mark.parametrize(
    "current,target,role",
    [
        ("pending", "viewed", "mp"),
        ("pending", "viewed", "local_deputy"),
        ("pending", "forwarded", "mp"),
        ("pending", "in_cabinet", "mp"),
        ("in_cabinet", "pending", "mp"),
        ("viewed", "replied", "local_deputy"),
        ("forwarded", "processing", "local_deputy"),
        ("processing", "replied", "local_deputy"),
    ],
)
def test_allowed_transitions(current, target, role):
    assert lifecycle.can_transition(current, target, role)
    lifecycle.check_transition(current, target, role)


@pytest.mark.parametrize("terminal", ["replied", "out_of_scope", "resolved"])
@pytest.mark.parametrize("target", ["pending", "viewed", "forwarded", "processing"])
def test_terminal_states_have_no_exit(terminal, target):
    for role in ("mp", "local_deputy"):
        assert not lifecycle.can_transition(terminal, target, role)
    with pytest.raises(TransitionError) as exc:
        lifecycle.check_transition(terminal, target, "mp")
    assert exc.value.status_code == 409


def test_nothing_leads_to_resolved():
    assert all(target != "resolved" for (_, target) in lifecycle.TRANSITIONS)
    with pytest.raises(TransitionError):
        lifecycle.check_transition("viewed", "resolved", "mp")


def test_role_restrictions():
    with pytest.raises(TransitionError) as exc:
        lifecycle.check_transition("pending", "forwarded", "local_deputy")
    assert exc.value.status_code == 403

    with pytest.raises(TransitionError) as exc:
        lifecycle.check_transition("pending", "viewed", "citizen")
    assert exc.value.status_code == 403


def test_unknown_status_is_a_bad_request():
    with pytest.raises(TransitionError) as exc:
        lifecycle.check_transition("pending", "archived", "mp")
    assert exc.value.status_code == 400


def test_allowed_targets_per_role():
    assert lifecycle.allowed_targets("pending", "mp") == [
        "forwarded",
        "in_cabinet",
        "out_of_scope",
        "replied",
        "viewed",
    ]
    assert lifecycle.allowed_targets("replied", "mp") == []


def test_actions_for_targets():
    assert lifecycle.action_for("viewed") == "viewed"
    assert lifecycle.action_for("replied") == "replied"
    assert lifecycle.action_for("out_of_scope") == "status_changed"


def test_overdue_only_for_open_and_old_complaints():
    now = datetime(2024, 5, 20)
    old = now - timedelta(days=8)
    recent = now - timedelta(days=2)

    assert lifecycle.is_overdue(SimpleNamespace(status="pending", created_at=old), now=now)
    assert not lifecycle.is_overdue(SimpleNamespace(status="pending", created_at=recent), now=now)
    assert not lifecycle.is_overdue(SimpleNamespace(status="replied", created_at=old), now=now)
    assert not lifecycle.is_overdue(SimpleNamespace(status="viewed", created_at=None), now=now)


def test_urgent_flag():
    assert lifecycle.is_urgent(SimpleNamespace(priority="urgent"))
    assert not lifecycle.is_urgent(SimpleNamespace(priority=None))
