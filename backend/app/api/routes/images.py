"""
Image upload passthrough for resource and institution pictures. Admin only.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from app.api.deps import get_blob_storage
from app.core.logging import get_logger
from app.core.security import CurrentUser, require_admin
from app.schemas.image import ImageUploadResponse
from app.services.interfaces.blob_storage import BlobStorage

logger = get_logger(__name__)
router = APIRouter(prefix="/images", tags=["Images"])


@router.post("/", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    _admin: CurrentUser = Depends(require_admin),
    storage: BlobStorage = Depends(get_blob_storage),
):
    content = await file.read()
    url = await storage.upload(file.filename or "", content)
    if url is None:
        logger.warning("image_upload_rejected", filename=file.filename)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File upload failed")
    return ImageUploadResponse(url=url)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_image(
    file_path: str = Query(..., min_length=1),
    _admin: CurrentUser = Depends(require_admin),
    storage: BlobStorage = Depends(get_blob_storage),
):
    if not await storage.delete(file_path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
