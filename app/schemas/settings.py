from typing import Optional

import httpx
from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class SettingsIn(CamelModel):
    app_name: str = Field(min_length=1, max_length=120)
    primary_color: str = Field(min_length=1, max_length=32)
    logo_url: Optional[str] = None
    webhook_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("webhook_url")
    @classmethod
    def webhook_must_be_http_url(cls, v):
        if v is None or not v.strip():
            return v
        try:
            url = httpx.URL(v.strip())
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid webhook URL: {e}")
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("Webhook URL must be an http(s) address")
        return v.strip()


class PublicSettingsOut(CamelModel):
    """Branding shown to visitors; the CRM webhook stays in the admin area."""

    app_name: str
    primary_color: str
    logo_url: Optional[str] = None


class SettingsOut(PublicSettingsOut):
    webhook_url: Optional[str] = None
