from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from typing import List
import logging

from ..database import get_session
from ..config import settings
from ..application.services.image_service import ImageService
from ..infrastructure.persistence.sqlalchemy.repositories.image_repository_sql import SqlImageRepository
from ..infrastructure.asset_host.cloudinary_host import CloudinaryAssetHost
from ..infrastructure.audit.std_logger import StdAuditLogger
from ..schemas.images.image import (
    UploadImageRequest,
    RenameImageRequest,
    ImageResponse,
    ImageMessageResponse,
)
from ..schemas.common.common import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["images"])

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Image not found"},
    500: {"model": ErrorResponse, "description": "Server Error"},
}


def get_image_service(session: Session = Depends(get_session)) -> ImageService:
    return ImageService(
        image_repo=SqlImageRepository(session),
        asset_host=CloudinaryAssetHost(),
        audit=StdAuditLogger(),
        empty_list_as_not_found=settings.LIST_EMPTY_AS_NOT_FOUND,
    )


@router.post(
    "/upload",
    response_model=ImageMessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Image was not provided or has an unsupported format"},
        502: {"model": ErrorResponse, "description": "Image host rejected the upload"},
        503: {"model": ErrorResponse, "description": "Image host unavailable"},
        500: {"model": ErrorResponse, "description": "Server Error"},
    },
)
def upload_image(body: UploadImageRequest, service: ImageService = Depends(get_image_service)):
    """Upload a new image"""
    try:
        record = service.upload(body.title, body.image)
        return ImageMessageResponse(message="Image successfully uploaded", image=ImageResponse.from_record(record))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading image: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/allImages", response_model=List[ImageResponse], responses=ERROR_RESPONSES)
def list_images(service: ImageService = Depends(get_image_service)):
    """Get all images"""
    try:
        return [ImageResponse.from_record(r) for r in service.list_all()]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error listing images: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/image/{image_id}", response_model=ImageResponse, responses=ERROR_RESPONSES)
def get_image(image_id: str, service: ImageService = Depends(get_image_service)):
    try:
        return ImageResponse.from_record(service.get(image_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving image {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/image/{image_id}", response_model=ImageMessageResponse, responses=ERROR_RESPONSES)
def rename_image(image_id: str, body: RenameImageRequest, service: ImageService = Depends(get_image_service)):
    """Update image title"""
    try:
        record = service.rename(image_id, body.newTitle)
        return ImageMessageResponse(message="Image Title updated", image=ImageResponse.from_record(record))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error renaming image {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.delete("/image/{image_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
def delete_image(image_id: str, service: ImageService = Depends(get_image_service)):
    """Delete an image and release its hosted asset"""
    try:
        service.delete(image_id)
        return MessageResponse(message="Image deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting image {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")
