import click
from flask.cli import with_appcontext

from choukwa.extensions import db
from choukwa.models import Account, Daira, ReplyTemplate, Wilaya
from choukwa.services.registration_service import hash_password, phone_taken
from choukwa.utils.validators import normalize_account_phone

# Governorates with a sample of their delegations
GEOGRAPHY = [
    ("11", "Tunis", ["Bab Bhar", "Bab Souika", "Carthage", "El Menzah", "La Marsa"]),
    ("12", "Ariana", ["Ariana Ville", "La Soukra", "Raoued", "Ettadhamen"]),
    ("13", "Ben Arous", ["Ben Arous", "Hammam Lif", "Mégrine", "Radès"]),
    ("14", "Manouba", ["Manouba", "Den Den", "Douar Hicher", "Oued Ellil"]),
    ("15", "Nabeul", ["Nabeul", "Hammamet", "Kélibia", "Korba", "Grombalia"]),
    ("16", "Zaghouan", ["Zaghouan", "El Fahs", "Nadhour"]),
    ("17", "Bizerte", ["Bizerte Nord", "Bizerte Sud", "Mateur", "Menzel Bourguiba"]),
    ("21", "Béja", ["Béja Nord", "Béja Sud", "Medjez El Bab", "Testour"]),
    ("22", "Jendouba", ["Jendouba", "Tabarka", "Aïn Draham", "Ghardimaou"]),
    ("23", "Le Kef", ["Le Kef Est", "Le Kef Ouest", "Dahmani", "Tajerouine"]),
    ("24", "Siliana", ["Siliana Nord", "Siliana Sud", "Makthar", "Gaâfour"]),
    ("31", "Sousse", ["Sousse Médina", "Sousse Jawhara", "Msaken", "Hammam Sousse"]),
    ("32", "Monastir", ["Monastir", "Moknine", "Jemmal", "Ksar Hellal"]),
    ("33", "Mahdia", ["Mahdia", "El Jem", "Ksour Essef", "Chebba"]),
    ("34", "Sfax", ["Sfax Ville", "Sfax Sud", "Sakiet Ezzit", "Jebiniana"]),
    ("41", "Kairouan", ["Kairouan Nord", "Kairouan Sud", "Sbikha", "Haffouz"]),
    ("42", "Kasserine", ["Kasserine Nord", "Kasserine Sud", "Sbeïtla", "Fériana"]),
    ("43", "Sidi Bouzid", ["Sidi Bouzid Ouest", "Sidi Bouzid Est", "Regueb", "Meknassy"]),
    ("51", "Gabès", ["Gabès Médina", "Gabès Sud", "El Hamma", "Mareth"]),
    ("52", "Médenine", ["Médenine Nord", "Médenine Sud", "Djerba Houmt Souk", "Zarzis"]),
    ("53", "Tataouine", ["Tataouine Nord", "Tataouine Sud", "Ghomrassen", "Remada"]),
    ("61", "Gafsa", ["Gafsa Nord", "Gafsa Sud", "Métlaoui", "Redeyef"]),
    ("62", "Tozeur", ["Tozeur", "Nefta", "Degache"]),
    ("63", "Kébili", ["Kébili Nord", "Kébili Sud", "Douz Nord", "Souk Lahad"]),
]

DEFAULT_TEMPLATES = [
    (
        "Accusé de réception",
        "Nous avons bien reçu votre plainte et elle est en cours d'examen. "
        "Nous reviendrons vers vous dans les meilleurs délais.",
    ),
    (
        "Transmise aux autorités",
        "Votre plainte a été transmise aux autorités compétentes. "
        "Nous suivons le dossier et vous tiendrons informé(e).",
    ),
    (
        "Problème résolu",
        "Nous vous informons que le problème signalé a été traité. "
        "Merci de votre confiance.",
    ),
    (
        "Hors compétence",
        "Votre plainte ne relève pas de nos compétences. Nous vous invitons à "
        "vous adresser à l'administration concernée.",
    ),
]


@click.command("init-db")
@with_appcontext
def init_db():
    """Create the tables."""
    db.create_all()
    click.echo("Database initialized.")


@click.command("seed-geography")
@with_appcontext
def seed_geography():
    """Load the governorates and a sample of their delegations."""
    created = 0
    for code, name, dairas in GEOGRAPHY:
        wilaya = Wilaya.query.filter_by(name=name).first()
        if wilaya is None:
            wilaya = Wilaya(name=name, code=code)
            db.session.add(wilaya)
            db.session.flush()
            created += 1
        existing = {d.name for d in wilaya.dairas}
        for daira_name in dairas:
            if daira_name not in existing:
                db.session.add(Daira(name=daira_name, wilaya_id=wilaya.id))
    db.session.commit()
    click.echo(f"{created} wilaya(s) created, {len(GEOGRAPHY)} in reference list.")


@click.command("seed-templates")
@with_appcontext
def seed_templates():
    """Insert the default reply templates."""
    for title, content in DEFAULT_TEMPLATES:
        if not ReplyTemplate.query.filter_by(title=title, is_default=True).first():
            db.session.add(ReplyTemplate(title=title, content=content, is_default=True))
    db.session.commit()
    click.echo("Default templates ready.")


@click.command("create-admin")
@click.option("--phone", required=True)
@click.option("--name", default="Administrateur")
@click.password_option()
@with_appcontext
def create_admin(phone, name, password):
    """Create an admin account."""
    phone = normalize_account_phone(phone)
    if not phone:
        raise click.BadParameter("Numéro de téléphone invalide.", param_hint="--phone")
    if phone_taken(phone):
        raise click.ClickException("Un compte existe déjà pour ce numéro.")
    db.session.add(
        Account(
            phone=phone,
            name=name,
            password_hash=hash_password(password),
            role="admin",
            active=True,
        )
    )
    db.session.commit()
    click.echo(f"Admin {phone} created.")


def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(seed_geography)
    app.cli.add_command(seed_templates)
    app.cli.add_command(create_admin)
