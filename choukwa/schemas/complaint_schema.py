from flask import current_app
from choukwa.extensions import ma
from choukwa.models.complaint import Complaint
from choukwa.services import lifecycle
from choukwa.services.categories import category_label


class ComplaintSchema(ma.SQLAlchemyAutoSchema):
    wilaya_name = ma.String(attribute="wilaya.name", dump_only=True)
    daira_name = ma.String(attribute="daira.name", dump_only=True)
    mp_name = ma.String(attribute="mp.name", dump_only=True)
    local_deputy_name = ma.String(attribute="local_deputy.name", dump_only=True)
    short_id = ma.String(dump_only=True)
    category_label = ma.Method("get_category_label")
    status_label = ma.Method("get_status_label")
    is_overdue = ma.Method("get_is_overdue")
    is_urgent = ma.Method("get_is_urgent")

    def get_category_label(self, obj):
        return category_label(obj.category)

    def get_status_label(self, obj):
        return lifecycle.STATUS_LABELS.get(obj.status, obj.status)

    def get_is_overdue(self, obj):
        days = current_app.config.get("OVERDUE_AFTER_DAYS", 7)
        return lifecycle.is_overdue(obj, days=days)

    def get_is_urgent(self, obj):
        return lifecycle.is_urgent(obj)

    class Meta:
        model = Complaint
        include_fk = True


# What a citizen sees of their own complaint
CITIZEN_EXCLUDED = ("internal_notes", "official_letter", "priority")


complaint_schema = ComplaintSchema()
complaints_schema = ComplaintSchema(many=True)
citizen_complaint_schema = ComplaintSchema(exclude=CITIZEN_EXCLUDED)
citizen_complaints_schema = ComplaintSchema(many=True, exclude=CITIZEN_EXCLUDED)
