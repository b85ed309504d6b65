from datetime import datetime

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from storefront.data.models.active_session import ActiveSessionModel


class SessionRepo:
    def __init__(self, db: Session):
        self.db = db

    def touch(self, session_id: str, now: datetime) -> None:
        row = self.db.get(ActiveSessionModel, session_id)
        if row:
            row.last_seen = now
        else:
            self.db.add(ActiveSessionModel(id=session_id, last_seen=now))
        self.db.flush()

    def delete_older_than(self, cutoff: datetime) -> int:
        result = self.db.execute(
            delete(ActiveSessionModel).where(ActiveSessionModel.last_seen < cutoff)
        )
        return result.rowcount

    def count_since(self, cutoff: datetime) -> int:
        return self.db.execute(
            select(func.count(ActiveSessionModel.id)).where(ActiveSessionModel.last_seen >= cutoff)
        ).scalar_one()

    def commit(self):
        self.db.commit()
