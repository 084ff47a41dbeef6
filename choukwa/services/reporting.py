"""In-memory aggregation of complaint rows for dashboards and reports.

Everything here is pure: the same rows and the same ``now`` always produce the
same report.
"""
from collections import OrderedDict
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from choukwa.services.categories import category_label
from choukwa.services import lifecycle

MONTH_NAMES = [
    "Janvier",
    "Février",
    "Mars",
    "Avril",
    "Mai",
    "Juin",
    "Juillet",
    "Août",
    "Septembre",
    "Octobre",
    "Novembre",
    "Décembre",
]

PERIODS = ("week", "month", "quarter", "year", "all")

# Statuses counted as an answer given to the citizen.
ANSWERED_STATUSES = (lifecycle.REPLIED, lifecycle.FORWARDED, lifecycle.RESOLVED)


def percentage(numerator, denominator):
    """Whole-number percentage rounded half up; 0 when the denominator is 0."""
    if not denominator:
        return 0
    value = Decimal(numerator) * 100 / Decimal(denominator)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def period_start(period, now=None):
    """Lower bound of a dashboard period preset, ``None`` for ``all``."""
    now = now or datetime.utcnow()
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return datetime(now.year, now.month, 1)
    if period == "quarter":
        year, month = _shift_month(now.year, now.month, -2)
        return datetime(year, month, 1)
    if period == "year":
        return datetime(now.year, 1, 1)
    if period in (None, "", "all"):
        return None
    raise ValueError(f"Période inconnue : '{period}'.")


def _shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def filter_by_date(rows, date_from=None, date_to=None):
    """Keep rows created in ``[date_from, date_to]``; bounds are optional datetimes."""
    if date_from is None and date_to is None:
        return list(rows)
    selected = []
    for row in rows:
        created = row.created_at
        if created is None:
            continue
        if date_from is not None and created < date_from:
            continue
        if date_to is not None and created > date_to:
            continue
        selected.append(row)
    return selected


def summarize(rows, now=None, overdue_days=7):
    counts = {status: 0 for status in lifecycle.STATUSES}
    overdue = urgent = 0
    for row in rows:
        counts[row.status] = counts.get(row.status, 0) + 1
        if lifecycle.is_overdue(row, now=now, days=overdue_days):
            overdue += 1
        if lifecycle.is_urgent(row):
            urgent += 1

    total = len(rows)
    answered = sum(counts.get(s, 0) for s in ANSWERED_STATUSES)
    return {
        "total": total,
        "pending": counts[lifecycle.PENDING],
        "viewed": counts[lifecycle.VIEWED],
        "replied": counts[lifecycle.REPLIED],
        "forwarded": counts[lifecycle.FORWARDED],
        "resolved": counts[lifecycle.RESOLVED],
        "out_of_scope": counts[lifecycle.OUT_OF_SCOPE],
        "in_cabinet": counts[lifecycle.IN_CABINET],
        "processing": counts[lifecycle.PROCESSING],
        "overdue": overdue,
        "urgent": urgent,
        "response_rate": percentage(answered, total),
    }


def group_by_location(rows, key, names=None, top_n=10):
    """Top ``top_n`` locations by volume. ``key`` is ``wilaya_id`` or ``daira_id``."""
    names = names or {}
    groups = {}
    for row in rows:
        location_id = getattr(row, key)
        group = groups.get(location_id)
        if group is None:
            group = {
                "id": location_id,
                "name": names.get(location_id) or (str(location_id) if location_id else "-"),
                "total": 0,
                "pending": 0,
                "replied": 0,
                "resolved": 0,
            }
            groups[location_id] = group
        group["total"] += 1
        if row.status == lifecycle.PENDING:
            group["pending"] += 1
        elif row.status == lifecycle.REPLIED:
            group["replied"] += 1
        elif row.status == lifecycle.RESOLVED:
            group["resolved"] += 1

    ordered = sorted(groups.values(), key=lambda g: (-g["total"], g["name"]))[:top_n]
    for group in ordered:
        group["rate"] = percentage(group["replied"] + group["resolved"], group["total"])
    return ordered


def group_by_category(rows):
    counts = {}
    for row in rows:
        counts[row.category] = counts.get(row.category, 0) + 1
    return [
        {"category": category, "name": category_label(category), "count": count}
        for category, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def group_by_month(rows, months=6, now=None):
    """Counts for the trailing ``months`` calendar months ending with ``now``'s month."""
    now = now or datetime.utcnow()
    buckets = OrderedDict()
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        buckets[(year, month)] = {"count": 0, "resolved": 0}

    for row in rows:
        if row.created_at is None:
            continue
        bucket = buckets.get((row.created_at.year, row.created_at.month))
        if bucket is None:
            continue
        bucket["count"] += 1
        if row.status in (lifecycle.REPLIED, lifecycle.RESOLVED):
            bucket["resolved"] += 1

    return [
        {
            "key": f"{year}-{month:02d}",
            "month": MONTH_NAMES[month - 1],
            "count": data["count"],
            "resolved": data["resolved"],
        }
        for (year, month), data in buckets.items()
    ]


def build_report(
    rows,
    names=None,
    group_by="wilaya",
    date_from=None,
    date_to=None,
    top_n=10,
    months=6,
    now=None,
    overdue_days=7,
):
    """Full report over already-fetched complaint rows.

    ``names`` maps location ids to display names for the chosen ``group_by``.
    """
    if group_by not in ("wilaya", "daira"):
        raise ValueError(f"Regroupement inconnu : '{group_by}'.")
    now = now or datetime.utcnow()
    rows = filter_by_date(list(rows), date_from, date_to)

    return {
        "summary": summarize(rows, now=now, overdue_days=overdue_days),
        "by_location": group_by_location(
            rows, f"{group_by}_id", names=names, top_n=top_n
        ),
        "by_category": group_by_category(rows),
        "monthly": group_by_month(rows, months=months, now=now),
    }
