import logging
from datetime import datetime

from choukwa.models import Complaint
from choukwa.repositories import (
    MPRepository,
    LocalDeputyRepository,
    ComplaintRepository,
    AuditLogRepository,
    NotificationRepository,
)
from choukwa.services import lifecycle
from choukwa.services.assignment import assign, TARGET_MP, TARGET_LOCAL_DEPUTY
from choukwa.services.categories import is_valid_category, category_label, ministry_for
from choukwa.services.errors import (
    ServiceError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
)
from choukwa.services.forwarding import (
    METHODS,
    SYSTEM,
    WHATSAPP,
    whatsapp_number_for,
    compose_whatsapp_message,
    whatsapp_link,
    compose_official_letter,
)
from choukwa.services.geography import GeoResolver

logger = logging.getLogger(__name__)

PRIORITIES = ("normal", "urgent")

# Status changes that carry their own payload and have a dedicated operation.
DEDICATED_TARGETS = {
    lifecycle.REPLIED: "Utilisez l'action de réponse pour répondre à une plainte.",
    lifecycle.FORWARDED: "Utilisez l'action de transfert pour transférer une plainte.",
}


class ComplaintService:
    """Everything an actor can do to a complaint.

    The service stages changes in the session through its repositories and
    leaves the commit to the caller.
    """

    def __init__(
        self,
        session,
        complaints=None,
        mps=None,
        deputies=None,
        audit=None,
        notifications=None,
        geo=None,
    ):
        self.session = session
        self.complaints = complaints or ComplaintRepository()
        self.mps = mps or MPRepository()
        self.deputies = deputies or LocalDeputyRepository()
        self.audit = audit or AuditLogRepository()
        self.notifications = notifications or NotificationRepository()
        self.geo = geo or GeoResolver()

    # --- ACCESS ---

    def can_access(self, complaint):
        ctx = self.session
        if ctx.is_admin:
            return True
        if ctx.is_citizen:
            return complaint.user_id == ctx.account_id
        if ctx.role == "mp":
            return complaint.mp_id is not None and complaint.mp_id == ctx.official_id
        if ctx.role == "local_deputy":
            return ctx.official_id is not None and ctx.official_id in (
                complaint.local_deputy_id,
                complaint.forwarded_to_deputy_id,
            )
        return False

    def can_act(self, complaint):
        """An MP keeps read access after a system forward but no longer acts on it."""
        if self.session.role == "mp":
            return complaint.assigned_to == TARGET_MP
        return True

    def _ensure_can_act(self, complaint):
        if not self.can_act(complaint):
            raise ForbiddenError("Cette plainte a été confiée au député local.")

    def get(self, complaint_id):
        complaint = self.complaints.get(complaint_id)
        if not complaint:
            raise NotFoundError("Plainte introuvable.")
        if not self.can_access(complaint):
            raise ForbiddenError("Accès non autorisé à cette plainte.")
        return complaint

    # --- SUBMISSION ---

    def submit(self, data, max_images=3, min_length=10):
        ctx = self.session
        if not ctx.is_citizen:
            raise ForbiddenError("Seuls les citoyens peuvent déposer une plainte.")

        content = (data.get("content") or "").strip()
        if len(content) < min_length:
            raise ServiceError(
                f"Le texte de la plainte doit contenir au moins {min_length} caractères."
            )

        images = data.get("images") or []
        if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
            raise ServiceError("Format d'images invalide, liste d'URL attendue.")
        if len(images) > max_images:
            raise ServiceError(f"Maximum {max_images} images par plainte.")

        category = data.get("category")
        if not is_valid_category(category):
            raise ServiceError("Catégorie de plainte invalide.")

        wilaya_id = _as_int(data.get("wilaya_id"))
        daira_id = _as_int(data.get("daira_id"))
        if wilaya_id is None or self.geo.wilaya_name(wilaya_id) is None:
            raise ServiceError("Wilaya invalide.")
        if daira_id is not None and not self.geo.daira_belongs_to(daira_id, wilaya_id):
            raise ServiceError("La daïra n'appartient pas à la wilaya choisie.")

        assignment = assign(category, wilaya_id, daira_id, self.mps, self.deputies)

        complaint = Complaint(
            user_id=ctx.account_id,
            user_phone=data.get("user_phone"),
            content=content,
            images=images,
            category=category,
            wilaya_id=wilaya_id,
            daira_id=daira_id,
            assigned_to=assignment.target,
            mp_id=assignment.official_id if assignment.target == TARGET_MP else None,
            local_deputy_id=(
                assignment.official_id
                if assignment.target == TARGET_LOCAL_DEPUTY
                else None
            ),
            ministry=assignment.ministry,
            status=lifecycle.PENDING,
            priority="normal",
        )
        self.complaints.add(complaint)

        self.audit.append(
            complaint.id,
            "created",
            ctx.display_name,
            ctx.role,
            new_value={
                "status": lifecycle.PENDING,
                "assigned_to": assignment.target,
                "official_id": assignment.official_id,
            },
        )
        self.notifications.notify_official(
            assignment.target,
            assignment.official_id,
            "Nouvelle plainte reçue",
            f"Une nouvelle plainte ({category_label(category)}) vous a été attribuée.",
            complaint.id,
        )
        if assignment.target == TARGET_MP:
            self.mps.refresh_stats(assignment.official_id)

        logger.info(
            "Complaint %s submitted, assigned to %s #%s",
            complaint.id,
            assignment.target,
            assignment.official_id,
        )
        return complaint

    # --- TRANSITIONS ---

    def _transition(self, complaint, target, action=None, extra=None, notes=None):
        self._ensure_can_act(complaint)
        old_status = complaint.status
        lifecycle.check_transition(old_status, target, self.session.role)

        complaint.status = target
        new_value = {"status": target}
        if extra:
            new_value.update(extra)

        entry = self.audit.append(
            complaint.id,
            action or lifecycle.action_for(target),
            self.session.display_name,
            self.session.role,
            old_value={"status": old_status},
            new_value=new_value,
            notes=notes,
        )
        logger.info(
            "Complaint %s: %s -> %s by %s #%s",
            complaint.id,
            old_status,
            target,
            self.session.role,
            self.session.account_id,
        )
        return entry

    def mark_viewed(self, complaint):
        """Mark as viewed when the status allows it; returns whether anything changed."""
        if not self.can_act(complaint) or not lifecycle.can_transition(
            complaint.status, lifecycle.VIEWED, self.session.role
        ):
            return False
        complaint.viewed_at = datetime.utcnow()
        self._transition(complaint, lifecycle.VIEWED)
        return True

    def reply(self, complaint, text):
        text = (text or "").strip()
        if not text:
            raise ServiceError("Le texte de la réponse est obligatoire.")

        self._transition(complaint, lifecycle.REPLIED, extra={"reply": text})
        complaint.reply = text
        complaint.replied_at = datetime.utcnow()

        self.notifications.notify(
            complaint.user_id,
            "Réponse à votre plainte",
            f"Votre plainte n° {complaint.short_id} a reçu une réponse.",
            complaint.id,
        )
        if complaint.mp_id:
            self.mps.refresh_stats(complaint.mp_id)
        return complaint

    def change_status(self, complaint, target, notes=None):
        if target in DEDICATED_TARGETS:
            raise ServiceError(DEDICATED_TARGETS[target])
        self._transition(complaint, target, notes=notes)
        if complaint.mp_id:
            self.mps.refresh_stats(complaint.mp_id)
        return complaint

    # --- FORWARDING ---

    def forward_to_deputy(
        self, complaint, deputy_id, method=SYSTEM, notes=None, country_code="216"
    ):
        """Hand a complaint to a local deputy.

        Returns the WhatsApp deep link for the ``whatsapp`` method, ``None``
        otherwise. All validation happens before anything is staged.
        """
        if self.session.role != "mp":
            raise ForbiddenError("Seul un député peut transférer une plainte.")
        self._ensure_can_act(complaint)
        if method not in METHODS:
            raise ServiceError("Méthode de transfert invalide.")

        deputy = self.deputies.get(_as_int(deputy_id))
        if not deputy or not deputy.is_active:
            raise NotFoundError("Député local introuvable.")
        if deputy.wilaya_id != complaint.wilaya_id or (
            complaint.daira_id is not None and deputy.daira_id != complaint.daira_id
        ):
            raise ServiceError("Ce député local ne couvre pas la localisation de la plainte.")

        lifecycle.check_transition(complaint.status, lifecycle.FORWARDED, "mp")

        link = None
        if method == WHATSAPP:
            number = whatsapp_number_for(deputy, country_code)
            message = compose_whatsapp_message(
                complaint,
                self.geo.wilaya_name(complaint.wilaya_id),
                self.geo.daira_name(complaint.daira_id),
                self.session.display_name,
                notes=notes,
                today=datetime.utcnow(),
            )
            link = whatsapp_link(number, message)

        complaint.forwarded_to = deputy.name
        complaint.forwarded_to_deputy_id = deputy.id
        complaint.forwarding_method = method
        complaint.forwarded_at = datetime.utcnow()
        if method == SYSTEM:
            complaint.assigned_to = TARGET_LOCAL_DEPUTY
            complaint.local_deputy_id = deputy.id

        self._transition(
            complaint,
            lifecycle.FORWARDED,
            action="forwarded_to_deputy" if method == SYSTEM else "forwarded_via_whatsapp",
            extra={"deputy_id": deputy.id, "deputy_name": deputy.name, "method": method},
            notes=notes,
        )

        if method == SYSTEM:
            self.notifications.notify_official(
                TARGET_LOCAL_DEPUTY,
                deputy.id,
                "Nouvelle plainte transférée",
                f"Le député {self.session.display_name} vous a transféré une plainte "
                f"({category_label(complaint.category)}).",
                complaint.id,
            )
        if complaint.mp_id:
            self.mps.refresh_stats(complaint.mp_id)
        return link

    def forward_to_ministry(self, complaint, notes=None):
        if self.session.role != "mp":
            raise ForbiddenError("Seul un député peut saisir un ministère.")
        self._ensure_can_act(complaint)
        lifecycle.check_transition(complaint.status, lifecycle.FORWARDED, "mp")

        letter = compose_official_letter(
            complaint,
            self.session.display_name,
            self.geo.wilaya_name(complaint.wilaya_id),
            self.geo.daira_name(complaint.daira_id),
            today=datetime.utcnow(),
        )
        complaint.official_letter = letter
        complaint.ministry = complaint.ministry or ministry_for(complaint.category)
        complaint.forwarded_to = complaint.ministry
        complaint.forwarding_method = "official_letter"
        complaint.forwarded_at = datetime.utcnow()

        self._transition(
            complaint,
            lifecycle.FORWARDED,
            action="forwarded_to_ministry",
            extra={"ministry": complaint.ministry},
            notes=notes,
        )
        if complaint.mp_id:
            self.mps.refresh_stats(complaint.mp_id)
        return letter

    # --- ANNOTATIONS ---

    def set_priority(self, complaint, priority):
        if priority not in PRIORITIES:
            raise ServiceError("Priorité invalide.")
        if priority == complaint.priority:
            raise ConflictError("La plainte a déjà cette priorité.")
        old = complaint.priority
        complaint.priority = priority
        self.audit.append(
            complaint.id,
            "priority_changed",
            self.session.display_name,
            self.session.role,
            old_value={"priority": old},
            new_value={"priority": priority},
        )
        return complaint

    def add_note(self, complaint, note):
        note = (note or "").strip()
        if not note:
            raise ServiceError("La note est vide.")
        stamp = datetime.utcnow().strftime("%d/%m/%Y %H:%M")
        line = f"[{stamp}] {self.session.display_name} : {note}"
        complaint.internal_notes = (
            f"{complaint.internal_notes}\n{line}" if complaint.internal_notes else line
        )
        self.audit.append(
            complaint.id,
            "note_added",
            self.session.display_name,
            self.session.role,
            notes=note,
        )
        return complaint

    # --- ADMIN ---

    def admin_update(self, complaint, data):
        """Direct edit by an admin.

        The only status change allowed is closing a complaint that is still
        open as ``resolved``.
        """
        if not self.session.is_admin:
            raise ForbiddenError("Action réservée aux administrateurs.")

        if "content" in data:
            content = (data.get("content") or "").strip()
            if not content:
                raise ServiceError("Le texte de la plainte est obligatoire.")
            complaint.content = content
        if "priority" in data:
            if data["priority"] not in PRIORITIES:
                raise ServiceError("Priorité invalide.")
            complaint.priority = data["priority"]
        if "internal_notes" in data:
            complaint.internal_notes = data.get("internal_notes")

        if any(k in data for k in ("category", "wilaya_id", "daira_id")):
            self._reassign(
                complaint,
                data.get("category", complaint.category),
                _as_int(data.get("wilaya_id", complaint.wilaya_id)),
                _as_int(data.get("daira_id", complaint.daira_id)),
            )

        if "status" in data and data["status"] != complaint.status:
            target = data["status"]
            if target not in lifecycle.STATUSES:
                raise ServiceError(f"Statut inconnu : '{target}'.")
            if complaint.status in lifecycle.TERMINAL_STATUSES:
                raise ConflictError("Cette plainte est clôturée, son statut ne peut plus changer.")
            if target != lifecycle.RESOLVED:
                raise ConflictError("L'administration peut seulement marquer une plainte comme résolue.")
            old = complaint.status
            complaint.status = target
            self.audit.append(
                complaint.id,
                "status_changed",
                self.session.display_name,
                self.session.role,
                old_value={"status": old},
                new_value={"status": target},
                notes=data.get("notes"),
            )
        if complaint.mp_id:
            self.mps.refresh_stats(complaint.mp_id)
        return complaint

    def _reassign(self, complaint, category, wilaya_id, daira_id):
        if (category, wilaya_id, daira_id) == (
            complaint.category,
            complaint.wilaya_id,
            complaint.daira_id,
        ):
            return
        if not is_valid_category(category):
            raise ServiceError("Catégorie de plainte invalide.")
        if wilaya_id is None or self.geo.wilaya_name(wilaya_id) is None:
            raise ServiceError("Wilaya invalide.")
        if daira_id is not None and not self.geo.daira_belongs_to(daira_id, wilaya_id):
            raise ServiceError("La daïra n'appartient pas à la wilaya choisie.")

        assignment = assign(category, wilaya_id, daira_id, self.mps, self.deputies)
        old = {
            "assigned_to": complaint.assigned_to,
            "mp_id": complaint.mp_id,
            "local_deputy_id": complaint.local_deputy_id,
        }
        previous_mp = complaint.mp_id

        complaint.category = category
        complaint.wilaya_id = wilaya_id
        complaint.daira_id = daira_id
        complaint.assigned_to = assignment.target
        complaint.ministry = assignment.ministry
        complaint.mp_id = (
            assignment.official_id if assignment.target == TARGET_MP else None
        )
        complaint.local_deputy_id = (
            assignment.official_id if assignment.target == TARGET_LOCAL_DEPUTY else None
        )

        self.audit.append(
            complaint.id,
            "reassigned",
            self.session.display_name,
            self.session.role,
            old_value=old,
            new_value={
                "assigned_to": assignment.target,
                "mp_id": complaint.mp_id,
                "local_deputy_id": complaint.local_deputy_id,
            },
        )
        if previous_mp and previous_mp != complaint.mp_id:
            self.mps.refresh_stats(previous_mp)


def _as_int(value):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ServiceError("Identifiant invalide.")
