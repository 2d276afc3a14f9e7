from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import require_admin
from app.database.db import get_db
from app.schemas.settings import PublicSettingsOut, SettingsIn, SettingsOut
from app.services.auth import AdminSession
from app.services.settings import get_settings, save_settings

router = APIRouter(tags=["settings"])


@router.get("/settings", response_model=PublicSettingsOut)
def read_branding(db: Session = Depends(get_db)):
    return get_settings(db)


@router.get("/admin/settings", response_model=SettingsOut)
def read_settings(db: Session = Depends(get_db), admin: AdminSession = Depends(require_admin)):
    return get_settings(db)


@router.put("/admin/settings", response_model=SettingsOut)
def update_settings(
    payload: SettingsIn,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    save_settings(db, payload.model_dump())
    return get_settings(db)
