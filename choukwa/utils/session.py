from dataclasses import dataclass
from typing import Optional

from flask_jwt_extended import get_jwt, get_jwt_identity


@dataclass(frozen=True)
class SessionContext:
    """Who is acting on the current request, as carried by the access token."""

    account_id: int
    role: str
    name: Optional[str] = None
    official_id: Optional[int] = None

    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def is_citizen(self):
        return self.role == "citizen"

    @property
    def is_official(self):
        return self.role in ("mp", "local_deputy")

    @property
    def display_name(self):
        return self.name or self.role

    @classmethod
    def from_account(cls, account):
        return cls(
            account_id=account.id,
            role=account.role,
            name=account.name,
            official_id=account.official_id,
        )

    def claims(self):
        return {"role": self.role, "name": self.name, "official_id": self.official_id}


def current_session():
    """Session of the authenticated caller. Only valid after ``@jwt_required()``."""
    claims = get_jwt()
    return SessionContext(
        account_id=int(get_jwt_identity()),
        role=claims.get("role"),
        name=claims.get("name"),
        official_id=claims.get("official_id"),
    )
