from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from bowling_lab.database import Base


class RosterMeta(Base):
    """Key/value facts about the cached roster, e.g. the last loaded fingerprint."""
    __tablename__ = "roster_meta"

    key: Mapped[str] = mapped_column(String(60), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<RosterMeta {self.key}={self.value}>"
