import pytest
from datetime import datetime
from types import SimpleNamespace
from urllib.parse import unquote
from choukwa.services.forwarding import (
    ForwardingError,
    normalize_phone,
    whatsapp_number_for,
    compose_whatsapp_message,
    whatsapp_link,
    compose_official_letter,
)

COMPLAINT = SimpleNamespace(
    id="3f2a9c1e-0000-4000-8000-000000000000",
    category="health",
    content="Le dispensaire est fermé le samedi.",
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("98 765 432", "21698765432"),
        ("+216 98 765 432", "21698765432"),
        ("0021698765432", "21698765432"),
        ("", None),
        (None, None),
        ("---", None),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_whatsapp_number_prefers_whatsapp_then_phone():
    both = SimpleNamespace(whatsapp_number="11111111", phone="22222222")
    phone_only = SimpleNamespace(whatsapp_number=None, phone="22222222")

    assert whatsapp_number_for(both) == "21611111111"
    assert whatsapp_number_for(phone_only) == "21622222222"


def test_whatsapp_number_missing_raises():
    with pytest.raises(ForwardingError) as exc:
        whatsapp_number_for(SimpleNamespace(whatsapp_number="", phone=None))
    assert exc.value.status_code == 400


def test_message_contains_complaint_details():
    message = compose_whatsapp_message(
        COMPLAINT,
        "Tunis",
        "Carthage",
        "Amina Ben Salah",
        notes="Urgent",
        today=datetime(2024, 3, 5),
    )
    assert "3f2a9c1e" in message
    assert "Santé" in message
    assert "Tunis" in message and "Carthage" in message
    assert COMPLAINT.content in message
    assert "Urgent" in message
    assert "Amina Ben Salah" in message
    assert "05/03/2024" in message


def test_whatsapp_link_is_url_encoded():
    link = whatsapp_link("21698765432", "Bonjour à tous\nligne 2")
    assert link.startswith("https://wa.me/21698765432?text=")
    encoded = link.split("?text=", 1)[1]
    assert " " not in encoded and "\n" not in encoded
    assert unquote(encoded) == "Bonjour à tous\nligne 2"


def test_official_letter_addresses_ministry():
    letter = compose_official_letter(
        COMPLAINT, "Amina Ben Salah", "Tunis", "Carthage", today=datetime(2024, 3, 5)
    )
    assert letter.startswith("Carthage, Tunis, le 05/03/2024")
    assert "Ministère de la Santé" in letter
    assert COMPLAINT.content in letter
    assert letter.rstrip().splitlines()[-2] == "Amina Ben Salah"


def test_official_letter_refused_for_municipal():
    municipal = SimpleNamespace(id="abc", category="municipal", content="Éclairage public")
    with pytest.raises(ForwardingError):
        compose_official_letter(municipal, "MP", "Tunis")
