"""Routing of a new complaint to the official responsible for it."""
import logging
from collections import namedtuple

from choukwa.services.categories import is_municipal, ministry_for
from choukwa.services.errors import ServiceError

logger = logging.getLogger(__name__)

TARGET_MP = "mp"
TARGET_LOCAL_DEPUTY = "local_deputy"

Assignment = namedtuple("Assignment", ["target", "official_id", "ministry"])


class AssignmentError(ServiceError):
    pass


def _first_by_id(candidates):
    # Several officials may share a location; lowest id wins.
    candidates = [c for c in candidates if c is not None]
    if not candidates:
        return None
    return min(candidates, key=lambda c: c.id)


def assign(category, wilaya_id, daira_id, mps, deputies):
    """Decide who handles a complaint.

    Municipal complaints go to the active local deputy of the exact
    (wilaya, daira) pair. Everything else goes to the MP of the wilaya and the
    daira is ignored. When nobody matches, the assignment still carries its
    target with ``official_id=None``.

    ``mps`` must expose ``find_by_wilaya(wilaya_id)`` and ``deputies`` must
    expose ``find_by_location(wilaya_id, daira_id)``.
    """
    if wilaya_id is None:
        raise AssignmentError("La wilaya est obligatoire.")

    if is_municipal(category):
        if daira_id is None:
            raise AssignmentError("La daïra est obligatoire pour une plainte municipale.")
        deputy = _first_by_id(deputies.find_by_location(wilaya_id, daira_id))
        if deputy is None:
            logger.warning(
                "No active local deputy for wilaya=%s daira=%s", wilaya_id, daira_id
            )
        return Assignment(TARGET_LOCAL_DEPUTY, deputy.id if deputy else None, None)

    mp = _first_by_id(mps.find_by_wilaya(wilaya_id))
    if mp is None:
        logger.warning("No active MP for wilaya=%s", wilaya_id)
    return Assignment(TARGET_MP, mp.id if mp else None, ministry_for(category))
