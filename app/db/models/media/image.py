# app/db/models/media/image.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

class ImageRecord(SQLModel, table=True):
    __tablename__ = "image_records"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: Optional[str] = None
    # image_url and asset_id are written once at upload time
    image_url: str = Field(max_length=1024)
    asset_id: str = Field(max_length=255, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
