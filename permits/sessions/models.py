from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from permits.infra.db import Base


class SessionRecord(Base):
    """Session côté serveur: le cookie ne porte que l'identifiant opaque."""
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<SessionRecord expires_at={self.expires_at.isoformat()}>"
