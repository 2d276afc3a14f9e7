from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.core.deps import require_admin
from app.schemas.images import ImageOut
from app.services.auth import AdminSession
from app.services.images import ImageTooLargeError, UnsupportedImageError, ingest_image

router = APIRouter(prefix="/admin/images", tags=["admin"])


@router.post("", response_model=ImageOut)
async def upload_image(
    image: UploadFile = File(...),
    admin: AdminSession = Depends(require_admin),
):
    content = await image.read()
    try:
        data_url = ingest_image(content, image.content_type or "")
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except UnsupportedImageError as e:
        raise HTTPException(status_code=415, detail=str(e))
    return {"data_url": data_url}
