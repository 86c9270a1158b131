from typing import List, Optional, Protocol
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ImageRecordDto:
    id: str
    title: Optional[str]
    image_url: str
    asset_id: str
    created_at: datetime
    updated_at: datetime


class ImageRepository(Protocol):
    def create(self, title: Optional[str], image_url: str, asset_id: str) -> ImageRecordDto:
        ...

    def list_all(self) -> List[ImageRecordDto]:
        ...

    def get_by_id(self, image_id: str) -> Optional[ImageRecordDto]:
        ...

    def update_title(self, image_id: str, title: Optional[str]) -> Optional[ImageRecordDto]:
        """Return the updated record, or None when no record has that id."""
        ...

    def delete(self, image_id: str) -> Optional[ImageRecordDto]:
        """Remove the record and return what was removed, or None when missing."""
        ...
