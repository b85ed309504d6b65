# storefront/repos/theme_repo.py
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.data.models.site_theme import SiteThemeModel, THEME_ID


class ThemeRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_theme(self) -> SiteThemeModel | None:
        return self.db.get(SiteThemeModel, THEME_ID)

    def create_theme(self, theme: SiteThemeModel) -> SiteThemeModel:
        self.db.add(theme)
        self.db.commit()
        self.db.refresh(theme)
        return theme

    def update_theme_version(self, old_version: int, new_data: dict) -> int:
        """
        UPDATE ... WHERE id = 1 AND version = old_version
        0 rows -> ktos inny zapisal w miedzyczasie
        """
        result = self.db.execute(
            update(SiteThemeModel)
            .where(SiteThemeModel.id == THEME_ID, SiteThemeModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, theme: SiteThemeModel):
        self.db.refresh(theme)
