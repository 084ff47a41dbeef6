from choukwa.extensions import db
from datetime import datetime


class MP(db.Model):
    __tablename__ = "mps"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    # Denormalized display names, kept for the imported directory
    wilaya = db.Column(db.String(100))
    daira = db.Column(db.String(150))
    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)
    daira_id = db.Column(db.Integer, db.ForeignKey("dairas.id"), nullable=True)
    bloc = db.Column(db.String(150))
    phone = db.Column(db.String(20))
    email = db.Column(db.String(120))
    bio = db.Column(db.Text)
    image = db.Column(db.String(500))
    complaints_count = db.Column(db.Integer, default=0)
    response_rate = db.Column(db.Integer, default=0)
    profile_url = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    wilaya_ref = db.relationship("Wilaya", backref="mps")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "wilaya": self.wilaya or (self.wilaya_ref.name if self.wilaya_ref else None),
            "wilaya_id": self.wilaya_id,
            "daira": self.daira,
            "daira_id": self.daira_id,
            "bloc": self.bloc,
            "phone": self.phone,
            "email": self.email,
            "bio": self.bio,
            "image": self.image,
            "complaints_count": self.complaints_count or 0,
            "response_rate": self.response_rate or 0,
            "profile_url": self.profile_url,
            "is_active": self.is_active,
        }


class LocalDeputy(db.Model):
    __tablename__ = "local_deputies"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)
    daira_id = db.Column(db.Integer, db.ForeignKey("dairas.id"), nullable=False)
    phone = db.Column(db.String(20))
    whatsapp_number = db.Column(db.String(20))
    email = db.Column(db.String(120))
    bio = db.Column(db.Text)
    image = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    wilaya = db.relationship("Wilaya", backref="local_deputies")
    daira = db.relationship("Daira", backref="local_deputies")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "wilaya_id": self.wilaya_id,
            "wilaya_name": self.wilaya.name if self.wilaya else None,
            "daira_id": self.daira_id,
            "daira_name": self.daira.name if self.daira else None,
            "phone": self.phone,
            "whatsapp_number": self.whatsapp_number,
            "email": self.email,
            "bio": self.bio,
            "image": self.image,
            "is_active": self.is_active,
        }
