"""Stockage des sessions web dans la base SQLite (table sessions).
Partage le moteur du UserStore: une seule base, une transaction courte par opération.
L'expiration est glissante: chaque écriture repousse expires_at de la durée de vie configurée.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging
import secrets

from sqlalchemy import delete
from sqlalchemy.engine import Engine

from permits.config import SESSION_TTL_SECONDS
from permits.infra.db import Base, make_session_factory, session_scope
from .models import SessionRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # SQLite stocke des dates naïves: tout est exprimé en UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SessionStore:
    def __init__(self, engine: Engine, ttl_seconds: int = SESSION_TTL_SECONDS):
        self.engine = engine
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions = make_session_factory(engine)

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine, tables=[SessionRecord.__table__])

    @staticmethod
    def new_id() -> str:
        return secrets.token_urlsafe(32)

    def load(self, sid: str) -> Optional[Dict[str, Any]]:
        """Données de la session, None si inconnue, révoquée ou expirée (l'expirée est supprimée)."""
        with session_scope(self._sessions) as session:
            record = session.get(SessionRecord, sid)
            if record is None:
                return None
            if record.expires_at <= _utcnow():
                session.delete(record)
                logger.info("sessions.load expired session removed")
                return None
            return dict(record.data or {})

    def save(self, sid: str, data: Dict[str, Any]) -> None:
        with session_scope(self._sessions) as session:
            record = session.get(SessionRecord, sid)
            if record is None:
                record = SessionRecord(id=sid)
                session.add(record)
            record.data = dict(data)
            record.expires_at = _utcnow() + self.ttl

    def delete(self, sid: str) -> bool:
        with session_scope(self._sessions) as session:
            res = session.execute(delete(SessionRecord).where(SessionRecord.id == sid))
            return res.rowcount > 0

    def purge_expired(self) -> int:
        """Supprime les sessions expirées et retourne leur nombre."""
        with session_scope(self._sessions) as session:
            res = session.execute(delete(SessionRecord).where(SessionRecord.expires_at <= _utcnow()))
            count = res.rowcount or 0
        logger.info("sessions.purge_expired removed=%s", count)
        return count
