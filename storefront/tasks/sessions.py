# storefront/tasks/sessions.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.presence_service import PresenceService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.sessions.purge_stale_sessions_task")
def purge_stale_sessions_task():
    logger.info("Purge stale sessions task started")

    db = SessionLocal()
    try:
        removed = PresenceService(db).purge_stale()
        logger.info(f"Removed {removed} stale sessions")
        return {"removed": removed}
    finally:
        db.close()
