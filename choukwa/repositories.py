"""Thin data-access objects, one per entity, used by the services.

Services only talk to these, so tests can hand them in-memory stand-ins.
"""
from sqlalchemy import func

from choukwa.extensions import db
from choukwa.models import (
    MP,
    LocalDeputy,
    Complaint,
    ComplaintAuditLog,
    Notification,
    Account,
)
from choukwa.services.reporting import ANSWERED_STATUSES, percentage


class MPRepository:
    def get(self, mp_id):
        return db.session.get(MP, mp_id) if mp_id else None

    def find_by_wilaya(self, wilaya_id):
        return (
            MP.query.filter_by(wilaya_id=wilaya_id, is_active=True)
            .order_by(MP.id.asc())
            .all()
        )

    def refresh_stats(self, mp_id):
        """Recompute the received-complaints counter and response rate of an MP."""
        mp = self.get(mp_id)
        if not mp:
            return
        total = Complaint.query.filter_by(mp_id=mp_id).count()
        answered = Complaint.query.filter(
            Complaint.mp_id == mp_id, Complaint.status.in_(ANSWERED_STATUSES)
        ).count()
        mp.complaints_count = total
        mp.response_rate = percentage(answered, total)


class LocalDeputyRepository:
    def get(self, deputy_id):
        return db.session.get(LocalDeputy, deputy_id) if deputy_id else None

    def find_by_location(self, wilaya_id, daira_id):
        return (
            LocalDeputy.query.filter_by(
                wilaya_id=wilaya_id, daira_id=daira_id, is_active=True
            )
            .order_by(LocalDeputy.id.asc())
            .all()
        )


class ComplaintRepository:
    def get(self, complaint_id):
        return db.session.get(Complaint, complaint_id)

    def add(self, complaint):
        db.session.add(complaint)
        db.session.flush()
        return complaint

    def delete(self, complaint):
        Notification.query.filter_by(complaint_id=complaint.id).delete()
        db.session.delete(complaint)

    def status_counts(self, **filters):
        rows = (
            db.session.query(Complaint.status, func.count(Complaint.id))
            .filter_by(**filters)
            .group_by(Complaint.status)
            .all()
        )
        return {status: count for status, count in rows}


class AuditLogRepository:
    def append(
        self,
        complaint_id,
        action,
        actor,
        actor_role,
        old_value=None,
        new_value=None,
        notes=None,
    ):
        entry = ComplaintAuditLog(
            complaint_id=complaint_id,
            action=action,
            action_by=actor,
            action_by_role=actor_role,
            old_value=old_value,
            new_value=new_value,
            notes=notes,
        )
        db.session.add(entry)
        return entry

    def for_complaint(self, complaint_id):
        return (
            ComplaintAuditLog.query.filter_by(complaint_id=complaint_id)
            .order_by(ComplaintAuditLog.created_at.desc(), ComplaintAuditLog.id.desc())
            .all()
        )


class NotificationRepository:
    def notify(self, account_id, title, description=None, complaint_id=None):
        if not account_id:
            return None
        notification = Notification(
            account_id=account_id,
            title=title,
            description=description,
            complaint_id=complaint_id,
        )
        db.session.add(notification)
        return notification

    def notify_official(self, role, official_id, title, description=None, complaint_id=None):
        """Notify every account linked to an MP or a local deputy."""
        if not official_id:
            return []
        column = Account.mp_id if role == "mp" else Account.local_deputy_id
        accounts = Account.query.filter(
            column == official_id, Account.role == role, Account.active == True
        ).all()
        return [
            self.notify(a.id, title, description, complaint_id) for a in accounts
        ]
