from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from storefront.data.database import Base


class ActiveSessionModel(Base):
    __tablename__ = "active_sessions"

    id = Column(String(100), primary_key=True)  # id sesji wybrany przez klienta
    last_seen = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
