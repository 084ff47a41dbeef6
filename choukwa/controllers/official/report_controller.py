from choukwa.controllers.official.complaint_controller import scoped_query
from choukwa.controllers.shared.report_helpers import report_response
from choukwa.services.geography import GeoResolver
from choukwa.utils.session import current_session


def get_report():
    """Own complaints grouped by daira"""
    ctx = current_session()
    return report_response(
        scoped_query(ctx), GeoResolver().daira_names(), group_by="daira"
    )
