import logging
from typing import List, Optional
from dataclasses import dataclass

from ..ports.image_repo import ImageRepository, ImageRecordDto
from ..ports.asset_host import AssetHost
from ..ports.audit_logger import AuditLogger
from ...exceptions import (
    APIException,
    MissingImage,
    UnsupportedFormat,
    NotFound,
    NoRecords,
)

logger = logging.getLogger(__name__)

# Declared-format prefixes accepted on upload. The payload bytes are not inspected.
SUPPORTED_IMAGE_PREFIXES = {
    "jpeg": "data:image/jpeg;base64,",
    "png": "data:image/png;base64,",
}


def is_supported_image(image: str) -> bool:
    return any(image.startswith(prefix) for prefix in SUPPORTED_IMAGE_PREFIXES.values())


@dataclass
class ImageService:
    image_repo: ImageRepository
    asset_host: AssetHost
    audit: Optional[AuditLogger] = None
    empty_list_as_not_found: bool = False

    def _audit(self, action: str, **kwargs) -> None:
        if self.audit is not None:
            self.audit.log(action, **kwargs)

    def upload(self, title: Optional[str], image: Optional[str]) -> ImageRecordDto:
        if not image:
            raise MissingImage()
        if not is_supported_image(image):
            raise UnsupportedFormat()

        # Upload first so that a failed upload never leaves a record behind
        try:
            asset = self.asset_host.upload(image)
        except APIException as e:
            self._audit("image_upload", success=False, details={"error": e.detail})
            raise
        logger.info(f"Uploaded image asset {asset.asset_id}")

        record = self.image_repo.create(title, asset.url, asset.asset_id)
        self._audit("image_upload", image_id=record.id, asset_id=record.asset_id)
        return record

    def list_all(self) -> List[ImageRecordDto]:
        records = self.image_repo.list_all()
        if not records and self.empty_list_as_not_found:
            raise NoRecords()
        return records

    def get(self, image_id: str) -> ImageRecordDto:
        record = self.image_repo.get_by_id(image_id)
        if record is None:
            raise NotFound(image_id)
        return record

    def rename(self, image_id: str, new_title: Optional[str]) -> ImageRecordDto:
        record = self.image_repo.update_title(image_id, new_title)
        if record is None:
            raise NotFound(image_id)
        self._audit("image_rename", image_id=record.id, details={"title": new_title})
        return record

    def delete(self, image_id: str) -> ImageRecordDto:
        """Delete the record, then release its remote asset.

        The local delete is authoritative: if the asset host fails or no
        longer knows the asset, the record stays deleted and the remote
        asset is left orphaned.
        """
        record = self.image_repo.delete(image_id)
        if record is None:
            raise NotFound(image_id)
        self._audit("image_delete", image_id=record.id, asset_id=record.asset_id)

        try:
            released = self.asset_host.delete(record.asset_id)
        except Exception as e:
            reason = e.detail if isinstance(e, APIException) else str(e)
            logger.warning(f"Remote asset {record.asset_id} not released after deleting image {record.id}: {reason}")
            self._audit("asset_delete", image_id=record.id, asset_id=record.asset_id, success=False, details={"error": reason})
            return record

        if not released:
            logger.warning(f"Remote asset {record.asset_id} was already missing on the image host")
        self._audit("asset_delete", image_id=record.id, asset_id=record.asset_id, success=released)
        return record
