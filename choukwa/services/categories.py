"""Complaint categories and the ministry responsible for each one.

``municipal`` is the only category routed to a local deputy. Every other
category goes to the MP of the wilaya and carries a ministry label used in
official letters. The label never affects routing.
"""

MUNICIPAL = "municipal"

CATEGORY_LABELS = {
    "municipal": "Affaires municipales",
    "security": "Sécurité",
    "military": "Affaires militaires",
    "environmental": "Environnement",
    "social": "Affaires sociales",
    "health": "Santé",
    "employment": "Emploi",
    "education": "Éducation",
    "higher_education": "Enseignement supérieur",
    "transport": "Transport",
    "housing": "Habitat",
    "infrastructure": "Infrastructures",
    "agriculture": "Agriculture",
    "justice": "Justice",
    "culture": "Culture",
    "youth_sports": "Jeunesse et sports",
    "religious_affairs": "Affaires religieuses",
    "finance": "Finances et fiscalité",
    "commerce": "Commerce",
    "tourism": "Tourisme",
    "communications": "Technologies de la communication",
}

MINISTRIES = {
    "security": "Ministère de l'Intérieur",
    "military": "Ministère de la Défense nationale",
    "environmental": "Ministère de l'Environnement",
    "social": "Ministère des Affaires sociales",
    "health": "Ministère de la Santé",
    "employment": "Ministère de l'Emploi et de la Formation professionnelle",
    "education": "Ministère de l'Éducation",
    "higher_education": "Ministère de l'Enseignement supérieur et de la Recherche scientifique",
    "transport": "Ministère du Transport",
    "housing": "Ministère de l'Équipement et de l'Habitat",
    "infrastructure": "Ministère de l'Équipement et de l'Habitat",
    "agriculture": "Ministère de l'Agriculture, des Ressources hydrauliques et de la Pêche",
    "justice": "Ministère de la Justice",
    "culture": "Ministère des Affaires culturelles",
    "youth_sports": "Ministère de la Jeunesse et des Sports",
    "religious_affairs": "Ministère des Affaires religieuses",
    "finance": "Ministère des Finances",
    "commerce": "Ministère du Commerce et du Développement des exportations",
    "tourism": "Ministère du Tourisme",
    "communications": "Ministère des Technologies de la communication",
}

CATEGORIES = tuple(CATEGORY_LABELS.keys())


def is_valid_category(category):
    return category in CATEGORY_LABELS


def is_municipal(category):
    return category == MUNICIPAL


def category_label(category):
    return CATEGORY_LABELS.get(category, category)


def ministry_for(category):
    """Display-only ministry label; ``None`` for municipal or unknown."""
    return MINISTRIES.get(category)


def category_list():
    return [
        {
            "id": key,
            "label": label,
            "municipal": key == MUNICIPAL,
            "ministry": MINISTRIES.get(key),
        }
        for key, label in CATEGORY_LABELS.items()
    ]
