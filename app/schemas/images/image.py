# app/schemas/images/image.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class UploadImageRequest(BaseModel):
    title: Optional[str] = None
    # Base64 data URI, e.g. "data:image/png;base64,...". Checked by the service, not here.
    image: Optional[str] = None

class RenameImageRequest(BaseModel):
    newTitle: Optional[str] = None

class ImageResponse(BaseModel):
    id: str
    title: Optional[str] = None
    imageUrl: str
    assetId: str
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_record(cls, record) -> "ImageResponse":
        return cls(
            id=record.id,
            title=record.title,
            imageUrl=record.image_url,
            assetId=record.asset_id,
            createdAt=record.created_at,
            updatedAt=record.updated_at,
        )

class ImageMessageResponse(BaseModel):
    message: str
    image: ImageResponse
