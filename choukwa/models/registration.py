from choukwa.extensions import db
from datetime import datetime


class PendingRegistration(db.Model):
    __tablename__ = "pending_registrations"

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(20), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    role = db.Column(db.String(20), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)
    daira_id = db.Column(db.Integer, db.ForeignKey("dairas.id"), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="pending")
    reviewed_at = db.Column(db.DateTime)
    reviewed_by = db.Column(db.Integer, db.ForeignKey("accounts.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    wilaya = db.relationship("Wilaya")
    daira = db.relationship("Daira")

    def to_dict(self):
        return {
            "id": self.id,
            "phone": self.phone,
            "name": self.name,
            "role": self.role,
            "wilaya_id": self.wilaya_id,
            "wilaya_name": self.wilaya.name if self.wilaya else None,
            "daira_id": self.daira_id,
            "daira_name": self.daira.name if self.daira else None,
            "status": self.status,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
