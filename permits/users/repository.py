"""Couche d’accès aux données (SQLite via SQLAlchemy) pour le domaine Utilisateurs.
Une instance de UserStore est construite au démarrage puis injectée dans les vues et le workflow de renouvellement.
Chaque opération est une instruction unique dans sa propre transaction courte.
"""
from typing import Optional
import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from permits.infra.db import Base, make_engine, make_session_factory, session_scope
from .models import User

logger = logging.getLogger(__name__)


class UniqueConstraintError(Exception):
    """Insertion refusée: un utilisateur avec cet email existe déjà."""

    def __init__(self, email: str):
        super().__init__(f"user already exists: {email}")
        self.email = email


class UserStore:
    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = make_engine(database_url)
        self._sessions = make_session_factory(self.engine)

    def init_schema(self) -> None:
        """Crée la table users (et l'index unique sur email) si absente."""
        Base.metadata.create_all(bind=self.engine, tables=[User.__table__])
        logger.info("users.repository schema ready url=%s", self.engine.url)

    def dispose(self) -> None:
        self.engine.dispose()

    def find_by_email(self, email: str) -> Optional[User]:
        """Récupère un utilisateur par email (comparaison sensible à la casse). None si introuvable."""
        with session_scope(self._sessions) as session:
            return session.scalar(select(User).where(User.email == email))

    def insert(self, *, first_name: str, last_name: str, email: str, password_hash: str, permit_type: str) -> int:
        """
        Insère un utilisateur et retourne son id.
        - Soulève UniqueConstraintError si l'email est déjà pris (rollback, aucune écriture partielle).
        """
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password_hash,
            permit_type=permit_type,
        )
        try:
            with session_scope(self._sessions) as session:
                session.add(user)
                session.flush()
                user_id = user.id
        except IntegrityError as e:
            logger.warning("users.repository.insert unique violation email=%s", email)
            raise UniqueConstraintError(email) from e
        logger.info("users.repository.insert id=%s", user_id)
        return user_id

    def count_renewed(self) -> int:
        """Nombre total d'utilisateurs dont renewed = true (compteur global, sans filtre)."""
        with session_scope(self._sessions) as session:
            return int(session.scalar(select(func.count()).select_from(User).where(User.renewed.is_(True))) or 0)

    def set_renewed(self, email: str, renewed: bool = True) -> bool:
        """Positionne le drapeau renewed d'un utilisateur. Retourne False si l'email est inconnu."""
        with session_scope(self._sessions) as session:
            res = session.execute(update(User).where(User.email == email).values(renewed=renewed))
            return res.rowcount > 0

    def ping(self) -> bool:
        with session_scope(self._sessions) as session:
            return session.scalar(select(1)) == 1
