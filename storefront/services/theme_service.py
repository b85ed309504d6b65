# storefront/services/theme_service.py
from sqlalchemy.orm import Session

from storefront.data.models.site_theme import SiteThemeModel, DEFAULT_THEME, THEME_ID
from storefront.domain.schemas import ThemeUpdate
from storefront.repos.theme_repo import ThemeRepo
from storefront.utils.errors import ConflictError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_FIELDS = ("primary_color", "secondary_color", "accent_color", "is_dark_mode")


def bootstrap_theme(db: Session) -> SiteThemeModel:
    """Krok startowy aplikacji: wstawia domyslny motyw jesli go nie ma."""
    repo = ThemeRepo(db)
    theme = repo.get_theme()
    if theme:
        return theme

    theme = repo.create_theme(SiteThemeModel(id=THEME_ID, version=1, **DEFAULT_THEME))
    logger.info("Utworzono domyslny motyw strony")
    return theme


class ThemeService:
    """
    Globalny motyw strony - jeden wiersz z wersja.
    Odczyt nigdy nie zapisuje; zapis podbija wersje (optimistic locking).
    """

    def __init__(self, db: Session):
        self.repo = ThemeRepo(db)

    def get_theme(self) -> dict:
        theme = self.repo.get_theme()
        if not theme:
            # bootstrap jeszcze nie przeszedl
            return {**DEFAULT_THEME, "version": 0, "updated_at": None}
        return self._to_dict(theme)

    @staticmethod
    def _to_dict(theme: SiteThemeModel) -> dict:
        return {
            "primary_color": theme.primary_color,
            "secondary_color": theme.secondary_color,
            "accent_color": theme.accent_color,
            "is_dark_mode": theme.is_dark_mode,
            "version": theme.version,
            "updated_at": theme.updated_at,
        }

    def set_theme(self, payload: ThemeUpdate) -> dict:
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if k in _FIELDS and v is not None
        }
        theme = self.repo.get_theme()

        if not theme:
            if payload.version not in (None, 0):
                raise ConflictError("Theme version mismatch")
            created = self.repo.create_theme(
                SiteThemeModel(id=THEME_ID, version=1, **{**DEFAULT_THEME, **changes})
            )
            logger.info("Motyw strony utworzony przy zapisie")
            return self._to_dict(created)

        expected = payload.version if payload.version is not None else theme.version
        rowcount = self.repo.update_theme_version(
            old_version=expected,
            new_data={**changes, "version": expected + 1},
        )

        if rowcount == 0:
            self.repo.rollback()
            raise ConflictError("Theme was modified by another request")

        self.repo.commit()
        self.repo.refresh(theme)

        logger.info(f"Motyw strony zaktualizowany, wersja {theme.version}")
        return self._to_dict(theme)
