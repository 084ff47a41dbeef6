from choukwa.extensions import db


class Wilaya(db.Model):
    __tablename__ = "wilayas"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    code = db.Column(db.String(10))

    dairas = db.relationship(
        "Daira", backref="wilaya", lazy=True, order_by="Daira.name"
    )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "code": self.code}


class Daira(db.Model):
    __tablename__ = "dairas"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)

    mutamadiyat = db.relationship(
        "Mutamadiya", backref="daira", lazy=True, order_by="Mutamadiya.name"
    )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "wilaya_id": self.wilaya_id}


class Mutamadiya(db.Model):
    __tablename__ = "mutamadiyat"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    daira_id = db.Column(db.Integer, db.ForeignKey("dairas.id"), nullable=False)
    wilaya_id = db.Column(db.Integer, db.ForeignKey("wilayas.id"), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "daira_id": self.daira_id,
            "wilaya_id": self.wilaya_id,
        }
