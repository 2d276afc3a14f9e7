from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import require_admin
from app.schemas.auth import LoginRequest, TokenOut
from app.services.auth import AdminSession, AuthError, login, logout

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
def admin_login(payload: LoginRequest):
    try:
        session = login(payload.username, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"token": session.token}


@router.post("/logout", status_code=204)
def admin_logout(admin: AdminSession = Depends(require_admin)):
    logout(admin)
