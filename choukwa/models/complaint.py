import uuid
from choukwa.extensions import db
from datetime import datetime


def _new_id():
    return str(uuid.uuid4())


class Complaint(db.Model):
    __tablename__ = "complaints"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    user_id = db.Column(db.Integer, db.ForeignKey("accounts.id"), nullable=False)
    user_phone = db.Column(db.String(20))
    content = db.Column(db.Text, nullable=False)
    images = db.Column(db.JSON, default=list)
    category = db.Column(db.String(40), nullable=False)

    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)
    daira_id = db.Column(db.Integer, db.ForeignKey("dairas.id"), nullable=True)

    # Routing
    assigned_to = db.Column(db.String(20), nullable=False)
    mp_id = db.Column(db.Integer, db.ForeignKey("mps.id"), nullable=True)
    local_deputy_id = db.Column(
        db.Integer, db.ForeignKey("local_deputies.id"), nullable=True
    )
    ministry = db.Column(db.String(150))

    status = db.Column(db.String(20), nullable=False, default="pending")
    viewed_at = db.Column(db.DateTime)
    reply = db.Column(db.Text)
    replied_at = db.Column(db.DateTime)

    # Forwarding metadata
    forwarded_to = db.Column(db.String(150))
    forwarded_to_deputy_id = db.Column(
        db.Integer, db.ForeignKey("local_deputies.id"), nullable=True
    )
    forwarding_method = db.Column(db.String(20))
    forwarded_at = db.Column(db.DateTime)

    official_letter = db.Column(db.Text)
    internal_notes = db.Column(db.Text)
    priority = db.Column(db.String(20), default="normal")

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    wilaya = db.relationship("Wilaya")
    daira = db.relationship("Daira")
    mp = db.relationship("MP", backref="complaints")
    local_deputy = db.relationship(
        "LocalDeputy", foreign_keys=[local_deputy_id], backref="complaints"
    )
    forwarded_to_deputy = db.relationship(
        "LocalDeputy", foreign_keys=[forwarded_to_deputy_id]
    )
    author = db.relationship("Account", backref="complaints")

    audit_entries = db.relationship(
        "ComplaintAuditLog",
        backref="complaint",
        cascade="all, delete-orphan",
        order_by="ComplaintAuditLog.created_at",
    )
    coordination_entries = db.relationship(
        "CoordinationEntry",
        backref="complaint",
        cascade="all, delete-orphan",
        order_by="CoordinationEntry.date.desc()",
    )

    @property
    def short_id(self):
        return self.id[:8] if self.id else None


class ComplaintAuditLog(db.Model):
    """Append-only trail of actions taken on a complaint."""

    __tablename__ = "complaint_audit_log"

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(
        db.String(36), db.ForeignKey("complaints.id"), nullable=False, index=True
    )
    action = db.Column(db.String(40), nullable=False)
    action_by = db.Column(db.String(150))
    action_by_role = db.Column(db.String(20))
    old_value = db.Column(db.JSON)
    new_value = db.Column(db.JSON)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "complaint_id": self.complaint_id,
            "action": self.action,
            "action_by": self.action_by,
            "action_by_role": self.action_by_role,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


CONTACT_TYPES = ("phone", "meeting", "email", "field_visit", "official_letter")


class CoordinationEntry(db.Model):
    __tablename__ = "coordination_entries"

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(
        db.String(36), db.ForeignKey("complaints.id"), nullable=False, index=True
    )
    date = db.Column(db.Date, nullable=False)
    entity = db.Column(db.String(200), nullable=False)
    contact_type = db.Column(db.String(30), nullable=False, default="phone")
    contact_person = db.Column(db.String(150))
    notes = db.Column(db.Text, nullable=False)
    documents = db.Column(db.JSON, default=list)
    author = db.Column(db.String(150))
    author_role = db.Column(db.String(20))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self):
        return {
            "id": self.id,
            "complaint_id": self.complaint_id,
            "date": self.date.isoformat() if self.date else None,
            "entity": self.entity,
            "contact_type": self.contact_type,
            "contact_person": self.contact_person,
            "notes": self.notes,
            "documents": self.documents or [],
            "author": self.author,
            "author_role": self.author_role,
        }
