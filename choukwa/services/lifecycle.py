"""Complaint status state machine."""
from datetime import datetime, timedelta

from choukwa.services.errors import ServiceError

PENDING = "pending"
VIEWED = "viewed"
REPLIED = "replied"
FORWARDED = "forwarded"
OUT_OF_SCOPE = "out_of_scope"
IN_CABINET = "in_cabinet"
PROCESSING = "processing"
RESOLVED = "resolved"

STATUSES = (
    PENDING,
    VIEWED,
    REPLIED,
    FORWARDED,
    OUT_OF_SCOPE,
    IN_CABINET,
    PROCESSING,
    RESOLVED,
)

STATUS_LABELS = {
    PENDING: "En attente",
    VIEWED: "Consultée",
    REPLIED: "Répondue",
    FORWARDED: "Transférée",
    OUT_OF_SCOPE: "Hors compétence",
    IN_CABINET: "Au cabinet",
    PROCESSING: "En traitement",
    RESOLVED: "Résolue",
}

# Statuses that still expect an action from an official.
OPEN_STATUSES = (PENDING, VIEWED, IN_CABINET, PROCESSING)
TERMINAL_STATUSES = (REPLIED, OUT_OF_SCOPE, RESOLVED)

MP = "mp"
LOCAL_DEPUTY = "local_deputy"
BOTH = (MP, LOCAL_DEPUTY)

# (from, to) -> roles allowed to perform it. Nothing leads to RESOLVED.
TRANSITIONS = {
    (PENDING, VIEWED): BOTH,
    (PENDING, REPLIED): BOTH,
    (PENDING, OUT_OF_SCOPE): BOTH,
    (PENDING, FORWARDED): (MP,),
    (PENDING, IN_CABINET): (MP,),
    (PENDING, PROCESSING): (LOCAL_DEPUTY,),
    (VIEWED, REPLIED): BOTH,
    (VIEWED, OUT_OF_SCOPE): BOTH,
    (VIEWED, FORWARDED): (MP,),
    (VIEWED, IN_CABINET): (MP,),
    (VIEWED, PROCESSING): (LOCAL_DEPUTY,),
    (IN_CABINET, PENDING): (MP,),
    (FORWARDED, VIEWED): (LOCAL_DEPUTY,),
    (FORWARDED, PROCESSING): (LOCAL_DEPUTY,),
    (FORWARDED, REPLIED): (LOCAL_DEPUTY,),
    (FORWARDED, OUT_OF_SCOPE): (LOCAL_DEPUTY,),
    (PROCESSING, REPLIED): (LOCAL_DEPUTY,),
    (PROCESSING, OUT_OF_SCOPE): (LOCAL_DEPUTY,),
}

# Audit action written for a transition when the caller gives none.
ACTION_FOR_STATUS = {
    VIEWED: "viewed",
    REPLIED: "replied",
    FORWARDED: "forwarded_to_deputy",
}


class TransitionError(ServiceError):
    status_code = 409


def allowed_targets(current, role):
    return sorted(
        target
        for (source, target), roles in TRANSITIONS.items()
        if source == current and role in roles
    )


def can_transition(current, target, role):
    return role in TRANSITIONS.get((current, target), ())


def check_transition(current, target, role):
    """Raise ``TransitionError`` unless ``role`` may move ``current`` to ``target``."""
    if target not in STATUSES:
        raise TransitionError(f"Statut inconnu : '{target}'.", 400)
    if role not in BOTH:
        raise TransitionError("Seuls les élus peuvent changer le statut.", 403)
    if (current, target) not in TRANSITIONS:
        raise TransitionError(
            f"Transition impossible : {STATUS_LABELS.get(current, current)} → "
            f"{STATUS_LABELS[target]}."
        )
    if role not in TRANSITIONS[(current, target)]:
        raise TransitionError(
            "Cette transition n'est pas autorisée pour votre rôle.", 403
        )


def action_for(target):
    return ACTION_FOR_STATUS.get(target, "status_changed")


def is_open(status):
    return status in OPEN_STATUSES


def is_overdue(complaint, now=None, days=7):
    if not is_open(complaint.status) or complaint.created_at is None:
        return False
    now = now or datetime.utcnow()
    return now - complaint.created_at > timedelta(days=days)


def is_urgent(complaint):
    return (complaint.priority or "normal") == "urgent"
