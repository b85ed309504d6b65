from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from storefront.repos.session_repo import SessionRepo
from storefront.utils.settings import ONLINE_THRESHOLD_SECONDS, SESSION_PURGE_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class PresenceService:
    """Licznik osob online na podstawie heartbeatow sesji."""

    def __init__(self, db: Session):
        self.repo = SessionRepo(db)

    def heartbeat(self, session_id: str, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        self.repo.touch(session_id, now)
        self.repo.delete_older_than(now - timedelta(seconds=SESSION_PURGE_SECONDS))
        self.repo.commit()
        return self.online_count(now)

    def online_count(self, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        return self.repo.count_since(now - timedelta(seconds=ONLINE_THRESHOLD_SECONDS))

    def purge_stale(self, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        removed = self.repo.delete_older_than(now - timedelta(seconds=SESSION_PURGE_SECONDS))
        self.repo.commit()
        if removed:
            logger.info(f"Usunieto {removed} nieaktywnych sesji")
        return removed
