# storefront/data/bootstrap.py
from storefront.data.database import Base, SessionLocal, engine
from storefront.services.theme_service import bootstrap_theme
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    """Tworzy tabele i wiersz motywu. Wolane raz przy starcie aplikacji."""
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create tables")
        raise
    logger.info("Database tables ready")

    db = SessionLocal()
    try:
        bootstrap_theme(db)
    finally:
        db.close()
