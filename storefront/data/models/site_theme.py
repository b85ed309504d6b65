from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from storefront.data.database import Base

THEME_ID = 1

DEFAULT_THEME = {
    "primary_color": "#f97316",
    "secondary_color": "#10b981",
    "accent_color": "#8b5cf6",
    "is_dark_mode": True,
}


class SiteThemeModel(Base):
    __tablename__ = "site_theme"

    # zawsze jeden wiersz o id = THEME_ID
    id = Column(Integer, primary_key=True, default=THEME_ID)
    primary_color = Column(String(7), nullable=False, default=DEFAULT_THEME["primary_color"])
    secondary_color = Column(String(7), nullable=False, default=DEFAULT_THEME["secondary_color"])
    accent_color = Column(String(7), nullable=False, default=DEFAULT_THEME["accent_color"])
    is_dark_mode = Column(Boolean, nullable=False, default=DEFAULT_THEME["is_dark_mode"])

    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
