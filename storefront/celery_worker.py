# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski trzeba zaimportowac explicite, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.sessions",
)

celery_app.conf.beat_schedule = {
    "purge-stale-sessions-every-minute": {
        "task": "storefront.tasks.sessions.purge_stale_sessions_task",
        "schedule": 60.0,  # co 60 sekund
    },
}

celery_app.conf.timezone = "UTC"
