"""
Accès base de données (SQLAlchemy) pour le fichier SQLite unique de l'application.
- Base déclarative partagée par les modèles ORM
- Fabrique de moteur avec les options propres à SQLite
- Portée de session transactionnelle (commit / rollback / close)
"""
from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str) -> Engine:
    """
    Crée le moteur SQLAlchemy.
    - SQLite: check_same_thread=False car FastAPI exécute les vues synchrones dans un pool de threads.
    - Active les clés étrangères et le journal WAL sur chaque connexion SQLite.
    """
    connect_args: dict = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": 30}
    engine = create_engine(database_url, echo=False, future=True, connect_args=connect_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _):
            cursor = dbapi_conn.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA journal_mode=WAL")
            finally:
                cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Ouvre une session, commit en sortie normale, rollback puis relance en cas d'erreur."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.debug("db.session: rollback")
        raise
    finally:
        session.close()
