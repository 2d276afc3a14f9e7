from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database.db import Base

SETTINGS_ID = 1

DEFAULT_SETTINGS = {
    "app_name": "SOES Eventos",
    "primary_color": "#ec4899",
    "logo_url": None,
    "webhook_url": "",
}


class Settings(Base):
    """Single-row table holding portal branding and the CRM webhook."""

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ID)
    app_name: Mapped[str] = mapped_column(String(120), nullable=False)
    primary_color: Mapped[str] = mapped_column(String(32), nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    webhook_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
