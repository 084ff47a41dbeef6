"""Bulk import of the MP directory from spreadsheet rows."""
import logging
import re

from choukwa.extensions import db
from choukwa.models import MP, Wilaya, Daira

logger = logging.getLogger(__name__)

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
COLUMNS = ("name", "daira", "bloc", "wilaya")


def parse_link_cell(cell):
    """Split a ``[label](url)`` cell into ``(label, url)``; plain text has no url."""
    text = str(cell or "").strip()
    match = LINK_RE.search(text)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return text, None


def normalize_row(row):
    """Turn a sheet row (list or mapping) into a flat MP record."""
    if isinstance(row, (list, tuple)):
        row = dict(zip(COLUMNS, row))

    name, profile_url = parse_link_cell(row.get("name"))
    daira, _ = parse_link_cell(row.get("daira"))
    bloc, _ = parse_link_cell(row.get("bloc"))
    wilaya, _ = parse_link_cell(row.get("wilaya"))
    return {
        "name": name,
        "daira": daira or None,
        "bloc": bloc or None,
        "wilaya": wilaya,
        "profile_url": row.get("profile_url") or profile_url,
    }


def import_mps(rows):
    """Stage one MP per valid row. Returns ``(created, skipped)``.

    ``skipped`` lists ``{"row", "reason"}`` for rows without a name or with a
    wilaya that does not exist.
    """
    wilayas = {w.name.strip().lower(): w for w in Wilaya.query.all()}
    created, skipped = [], []

    for index, raw in enumerate(rows, start=1):
        record = normalize_row(raw)
        if not record["name"]:
            skipped.append({"row": index, "reason": "Nom manquant"})
            continue

        wilaya = wilayas.get((record["wilaya"] or "").lower())
        if wilaya is None:
            skipped.append(
                {"row": index, "reason": f"Wilaya inconnue : '{record['wilaya']}'"}
            )
            continue

        daira = None
        if record["daira"]:
            daira = Daira.query.filter(
                Daira.wilaya_id == wilaya.id,
                db.func.lower(Daira.name) == record["daira"].lower(),
            ).first()

        mp = MP(
            name=record["name"],
            wilaya=wilaya.name,
            wilaya_id=wilaya.id,
            daira=record["daira"],
            daira_id=daira.id if daira else None,
            bloc=record["bloc"],
            profile_url=record["profile_url"],
            is_active=True,
        )
        db.session.add(mp)
        created.append(mp)

    logger.info("MP import: %d created, %d skipped", len(created), len(skipped))
    return created, skipped
