from sqlalchemy.orm import Session

from app.models.settings import DEFAULT_SETTINGS, SETTINGS_ID, Settings


def get_settings(db: Session) -> dict:
    """Stored settings merged over the defaults; works before anything is saved."""
    settings = dict(DEFAULT_SETTINGS)
    row = db.get(Settings, SETTINGS_ID)
    if row is None:
        return settings

    for key in DEFAULT_SETTINGS:
        value = getattr(row, key)
        if value is not None:
            settings[key] = value
    return settings


def get_webhook_url(db: Session):
    return get_settings(db)["webhook_url"]


def save_settings(db: Session, data: dict) -> Settings:
    row = db.get(Settings, SETTINGS_ID)
    if row is None:
        row = Settings(id=SETTINGS_ID, **{**DEFAULT_SETTINGS, **data})
        db.add(row)
    else:
        for key, value in data.items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return row
