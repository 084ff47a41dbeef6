from choukwa.extensions import db
from datetime import datetime


ROLES = ("citizen", "mp", "local_deputy", "admin")
OFFICIAL_ROLES = ("mp", "local_deputy")


class Account(db.Model):
    __tablename__ = "accounts"

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(150))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="citizen")
    active = db.Column(db.Boolean, default=True)

    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=True)
    mp_id = db.Column(db.Integer, db.ForeignKey("mps.id"), nullable=True)
    local_deputy_id = db.Column(
        db.Integer, db.ForeignKey("local_deputies.id"), nullable=True
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    mp = db.relationship("MP", backref="accounts")
    local_deputy = db.relationship("LocalDeputy", backref="accounts")

    @property
    def official_id(self):
        if self.role == "mp":
            return self.mp_id
        if self.role == "local_deputy":
            return self.local_deputy_id
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "phone": self.phone,
            "name": self.name,
            "role": self.role,
            "active": self.active,
            "wilaya_id": self.wilaya_id,
            "official_id": self.official_id,
        }


class TokenBlocklist(db.Model):
    __tablename__ = "token_blocklist"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
