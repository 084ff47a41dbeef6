"""Lookups over the wilaya / daira / mutamadiya reference tables."""
from choukwa.extensions import db
from choukwa.models import Wilaya, Daira, Mutamadiya


class GeoResolver:
    """Display and cascading-select helpers.

    Dangling references resolve to ``None`` instead of raising.
    """

    def dairas_of(self, wilaya_id):
        return Daira.query.filter_by(wilaya_id=wilaya_id).order_by(Daira.name).all()

    def mutamadiyat_of(self, daira_id):
        return (
            Mutamadiya.query.filter_by(daira_id=daira_id)
            .order_by(Mutamadiya.name)
            .all()
        )

    def wilaya_name(self, wilaya_id):
        wilaya = db.session.get(Wilaya, wilaya_id) if wilaya_id else None
        return wilaya.name if wilaya else None

    def daira_name(self, daira_id):
        daira = db.session.get(Daira, daira_id) if daira_id else None
        return daira.name if daira else None

    def wilaya_name_of_daira(self, daira_id):
        daira = db.session.get(Daira, daira_id) if daira_id else None
        if not daira:
            return None
        return self.wilaya_name(daira.wilaya_id)

    def daira_belongs_to(self, daira_id, wilaya_id):
        daira = db.session.get(Daira, daira_id) if daira_id else None
        return daira is not None and daira.wilaya_id == wilaya_id

    def wilaya_names(self):
        return {w.id: w.name for w in Wilaya.query.all()}

    def daira_names(self, wilaya_id=None):
        query = Daira.query
        if wilaya_id:
            query = query.filter_by(wilaya_id=wilaya_id)
        return {d.id: d.name for d in query.all()}

    def tree(self):
        return {
            "wilayas": [w.to_dict() for w in Wilaya.query.order_by(Wilaya.code).all()],
            "dairas": [d.to_dict() for d in Daira.query.order_by(Daira.name).all()],
            "mutamadiyat": [
                m.to_dict() for m in Mutamadiya.query.order_by(Mutamadiya.name).all()
            ],
        }
