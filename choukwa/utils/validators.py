import re
from datetime import datetime

PHONE_RE = re.compile(r"^\+?\d{8,15}$")


def validate_string(val, name, max_len=100, required=True):
    if not val or not str(val).strip():
        if required:
            return False, f"Le champ '{name}' est obligatoire."
        return True, None
    if len(str(val)) > max_len:
        return False, f"Le champ '{name}' est trop long (max {max_len} caractères)."
    return True, None


def validate_int(val, name):
    try:
        if val is None or val == "":
            return False, f"Le champ '{name}' est obligatoire."
        return True, int(val)
    except (ValueError, TypeError):
        return False, f"Le champ '{name}' doit être un nombre valide."


def normalize_account_phone(val):
    """Strip spaces and dashes; ``None`` when the result is not a phone number."""
    if not val:
        return None
    phone = re.sub(r"[\s\-.()]", "", str(val))
    return phone if PHONE_RE.match(phone) else None


def parse_date_arg(val, end_of_day=False):
    """ISO date or datetime from a query string, ``None`` when absent or invalid."""
    if not val:
        return None
    try:
        parsed = datetime.fromisoformat(val)
    except ValueError:
        return None
    if end_of_day and len(val) == 10:
        parsed = parsed.replace(hour=23, minute=59, second=59)
    return parsed
