"""Messages sent when an MP hands a complaint over to someone else."""
import re
from urllib.parse import quote

from choukwa.services.categories import category_label, ministry_for
from choukwa.services.errors import ServiceError

SYSTEM = "system"
WHATSAPP = "whatsapp"
METHODS = (SYSTEM, WHATSAPP)

WHATSAPP_BASE_URL = "https://wa.me"


class ForwardingError(ServiceError):
    pass


def normalize_phone(raw, country_code="216"):
    """Digits-only international number, as wa.me expects it.

    Local 8-digit numbers get the default country code; ``+`` and ``00``
    international prefixes are stripped.
    """
    if not raw:
        return None
    digits = re.sub(r"\D", "", str(raw))
    if str(raw).strip().startswith("00"):
        digits = digits[2:]
    if not digits:
        return None
    if len(digits) <= 8:
        digits = f"{country_code}{digits}"
    return digits


def whatsapp_number_for(deputy, country_code="216"):
    """WhatsApp number first, phone as fallback. Raises if the deputy has neither."""
    number = normalize_phone(deputy.whatsapp_number, country_code) or normalize_phone(
        deputy.phone, country_code
    )
    if not number:
        raise ForwardingError(
            "Ce député local n'a pas de numéro WhatsApp ou de téléphone enregistré."
        )
    return number


def compose_whatsapp_message(complaint, wilaya_name, daira_name, sender, notes=None, today=None):
    lines = [
        "*Plainte transférée par votre député*",
        "",
        f"📋 *N° :* {complaint.id[:8]}",
        f"📁 *Catégorie :* {category_label(complaint.category)}",
        f"📍 *Wilaya :* {wilaya_name or '-'}",
        f"🏢 *Daïra :* {daira_name or '-'}",
        "",
        "📝 *Texte de la plainte :*",
        complaint.content,
    ]
    if notes:
        lines += ["", "💬 *Notes :*", notes]
    lines += ["", "---", f"_Transférée par : {sender}_"]
    if today is not None:
        lines.append(f"_Date : {today.strftime('%d/%m/%Y')}_")
    return "\n".join(lines)


def whatsapp_link(number, message):
    return f"{WHATSAPP_BASE_URL}/{number}?text={quote(message, safe='')}"


def compose_official_letter(complaint, mp_name, wilaya_name, daira_name=None, today=None):
    """Formal letter addressed to the ministry in charge of the complaint's category."""
    ministry = ministry_for(complaint.category)
    if ministry is None:
        raise ForwardingError(
            "Les plaintes municipales ne sont pas adressées à un ministère."
        )

    location = wilaya_name or "-"
    if daira_name:
        location = f"{daira_name}, {location}"
    header = location
    if today is not None:
        header = f"{location}, le {today.strftime('%d/%m/%Y')}"

    return "\n".join(
        [
            header,
            "",
            f"À l'attention de Monsieur le Ministre, {ministry}",
            "",
            f"Objet : transmission de la plainte citoyenne n° {complaint.id[:8]} "
            f"({category_label(complaint.category)})",
            "",
            "Monsieur le Ministre,",
            "",
            "J'ai l'honneur de porter à votre connaissance la plainte suivante, "
            f"déposée par un citoyen de la wilaya de {wilaya_name or '-'} :",
            "",
            f"« {complaint.content} »",
            "",
            "Je vous saurais gré de bien vouloir donner à cette requête la suite "
            "qu'elle mérite et de me tenir informé des mesures prises.",
            "",
            "Veuillez agréer, Monsieur le Ministre, l'expression de ma haute considération.",
            "",
            mp_name,
            "Député à l'Assemblée des représentants du peuple",
        ]
    )
