from flask import request, jsonify
from choukwa.extensions import db
from choukwa.models import ReplyTemplate
from choukwa.services.categories import is_valid_category
from choukwa.utils.session import current_session
from choukwa.utils.validators import validate_string


def list_templates():
    category = request.args.get("category")
    query = ReplyTemplate.query
    if category and category != "all":
        query = query.filter(
            (ReplyTemplate.category == category) | (ReplyTemplate.category.is_(None))
        )
    templates = query.order_by(
        ReplyTemplate.is_default.desc(), ReplyTemplate.title.asc()
    ).all()
    return jsonify([t.to_dict() for t in templates]), 200


def create_template():
    data = request.get_json() or {}

    for field, label, max_len in (("title", "Titre", 200), ("content", "Contenu", 5000)):
        ok, msg = validate_string(data.get(field), label, max_len=max_len)
        if not ok:
            return jsonify({"message": msg}), 400

    category = data.get("category") or None
    if category and not is_valid_category(category):
        return jsonify({"message": "Catégorie invalide."}), 400

    template = ReplyTemplate(
        title=data["title"].strip(),
        content=data["content"].strip(),
        category=category,
        is_default=False,
        created_by=current_session().account_id,
    )
    db.session.add(template)
    db.session.commit()
    return jsonify(template.to_dict()), 201


def update_template(template_id):
    template = db.get_or_404(ReplyTemplate, template_id)
    data = request.get_json() or {}

    if "title" in data:
        ok, msg = validate_string(data.get("title"), "Titre", max_len=200)
        if not ok:
            return jsonify({"message": msg}), 400
        template.title = data["title"].strip()
    if "content" in data:
        ok, msg = validate_string(data.get("content"), "Contenu", max_len=5000)
        if not ok:
            return jsonify({"message": msg}), 400
        template.content = data["content"].strip()
    if "category" in data:
        category = data.get("category") or None
        if category and not is_valid_category(category):
            return jsonify({"message": "Catégorie invalide."}), 400
        template.category = category

    db.session.commit()
    return jsonify(template.to_dict()), 200


def delete_template(template_id):
    template = db.get_or_404(ReplyTemplate, template_id)
    if template.is_default:
        return (
            jsonify({"message": "Les modèles par défaut ne peuvent pas être supprimés."}),
            409,
        )
    db.session.delete(template)
    db.session.commit()
    return jsonify({"message": "Modèle supprimé."}), 200
