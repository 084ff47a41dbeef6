from flask import request
from choukwa.controllers.shared.report_helpers import report_response
from choukwa.models import Complaint, MP, LocalDeputy, Account
from choukwa.services.geography import GeoResolver


def get_report():
    """Global report, by wilaya unless ``group_by=daira``"""
    geo = GeoResolver()
    group_by = request.args.get("group_by", "wilaya")
    wilaya_id = request.args.get("wilaya_id", type=int)

    query = Complaint.query
    if wilaya_id:
        query = query.filter(Complaint.wilaya_id == wilaya_id)

    names = geo.daira_names(wilaya_id) if group_by == "daira" else geo.wilaya_names()
    extra = {
        "officials": {
            "mps": MP.query.filter_by(is_active=True).count(),
            "local_deputies": LocalDeputy.query.filter_by(is_active=True).count(),
            "citizens": Account.query.filter_by(role="citizen").count(),
        }
    }
    return report_response(query, names, group_by, extra=extra)
