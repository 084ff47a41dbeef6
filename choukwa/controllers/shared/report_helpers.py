import logging
from datetime import datetime
from flask import request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from choukwa.services import reporting
from choukwa.utils.validators import parse_date_arg

logger = logging.getLogger(__name__)


def report_response(query, names, group_by, extra=None):
    """Run the report over ``query`` with the period / date range of the request."""
    now = datetime.utcnow()
    period = request.args.get("period", "all")
    try:
        date_from = reporting.period_start(period, now)
    except ValueError as e:
        return jsonify({"message": str(e)}), 400

    date_from = parse_date_arg(request.args.get("date_from")) or date_from
    date_to = parse_date_arg(request.args.get("date_to"), end_of_day=True)

    try:
        rows = query.all()
    except SQLAlchemyError:
        logger.exception("Report query failed")
        rows = []

    try:
        report = reporting.build_report(
            rows,
            names=names,
            group_by=group_by,
            date_from=date_from,
            date_to=date_to,
            top_n=current_app.config["REPORT_TOP_N"],
            months=current_app.config["REPORT_MONTHS"],
            now=now,
            overdue_days=current_app.config["OVERDUE_AFTER_DAYS"],
        )
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    report["period"] = period
    if extra:
        report.update(extra)
    return jsonify(report), 200
