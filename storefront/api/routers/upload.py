# storefront/api/routers/upload.py
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from requests import RequestException

from storefront.api.deps import require_admin
from storefront.domain.schemas import AuthUser, UploadOut
from storefront.services.media_client import (
    MediaClient,
    IMAGE_TYPES,
    IMAGE_MAX_SIZE,
    VIDEO_TYPES,
    VIDEO_MAX_SIZE,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["upload"])


def get_media_client() -> MediaClient:
    return MediaClient()


def _read_validated(file: UploadFile | None, allowed, max_size: int, kind: str, labels: str, limit: str) -> bytes:
    if file is None:
        raise HTTPException(status_code=400, detail=f"No {kind} file provided")
    # najwyzej max_size + 1 bajtow
    data = file.file.read(max_size + 1)
    if not data:
        raise HTTPException(status_code=400, detail=f"No {kind} file provided")
    if file.content_type not in allowed:
        raise HTTPException(status_code=400, detail=f"Invalid file type. Allowed: {labels}.")
    if len(data) > max_size:
        raise HTTPException(status_code=400, detail=f"File too large. Maximum size is {limit}.")
    return data


def _upload(client: MediaClient, data: bytes, content_type: str, resource_type: str, folder: str) -> dict:
    try:
        return client.upload(data, content_type, resource_type, folder)
    except RequestException as e:
        logger.error(f"Upload {resource_type} nieudany: {e}")
        raise HTTPException(status_code=500, detail=f"{resource_type.capitalize()} upload failed. Please try again.")


@router.post("/upload", response_model=UploadOut)
def upload_image(
    image: UploadFile | None = File(None),
    admin: AuthUser = Depends(require_admin),
    client: MediaClient = Depends(get_media_client),
):
    data = _read_validated(image, IMAGE_TYPES, IMAGE_MAX_SIZE, "image", "JPG, PNG, WebP", "5 MB")
    return _upload(client, data, image.content_type, "image", "storefront/products")


@router.post("/upload-video", response_model=UploadOut)
def upload_video(
    video: UploadFile | None = File(None),
    admin: AuthUser = Depends(require_admin),
    client: MediaClient = Depends(get_media_client),
):
    data = _read_validated(video, VIDEO_TYPES, VIDEO_MAX_SIZE, "video", "MP4, WebM, MOV, AVI", "50 MB")
    return _upload(client, data, video.content_type, "video", "storefront/videos")
