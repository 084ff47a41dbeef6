import logging
from functools import wraps
from flask import jsonify, request
from flask_jwt_extended import get_jwt

logger = logging.getLogger(__name__)

CITIZEN = "citizen"
MP = "mp"
LOCAL_DEPUTY = "local_deputy"
ADMIN = "admin"
OFFICIALS = (MP, LOCAL_DEPUTY)


def roles_required(*roles):
    """Restrict a view to the given roles; tuples such as ``OFFICIALS`` are flattened."""
    allowed = set()
    for role in roles:
        if isinstance(role, (tuple, list, set)):
            allowed.update(role)
        else:
            allowed.add(role)

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            role = get_jwt().get("role")
            if role not in allowed:
                logger.warning(
                    "Role %s refused on %s %s", role, request.method, request.path
                )
                return jsonify({"message": "Accès refusé pour ce rôle."}), 403
            return fn(*args, **kwargs)

        return decorator

    return wrapper
