import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .....db.models import ImageRecord
from .....application.ports.image_repo import ImageRepository, ImageRecordDto
from .....exceptions import StoreFailure

logger = logging.getLogger(__name__)


class SqlImageRepository(ImageRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, record: ImageRecord) -> ImageRecordDto:
        return ImageRecordDto(
            id=record.id,
            title=record.title,
            image_url=record.image_url,
            asset_id=record.asset_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def _fail(self, operation: str, error: SQLAlchemyError) -> StoreFailure:
        self.session.rollback()
        logger.error(f"Image store {operation} failed: {str(error)}")
        return StoreFailure()

    def create(self, title: Optional[str], image_url: str, asset_id: str) -> ImageRecordDto:
        record = ImageRecord(title=title, image_url=image_url, asset_id=asset_id)
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as e:
            raise self._fail("create", e)
        return self._to_dto(record)

    def list_all(self) -> List[ImageRecordDto]:
        try:
            records = self.session.exec(select(ImageRecord).order_by(ImageRecord.created_at)).all()
        except SQLAlchemyError as e:
            raise self._fail("list", e)
        return [self._to_dto(r) for r in records]

    def get_by_id(self, image_id: str) -> Optional[ImageRecordDto]:
        try:
            record = self.session.get(ImageRecord, image_id)
        except SQLAlchemyError as e:
            raise self._fail("get", e)
        return self._to_dto(record) if record else None

    def update_title(self, image_id: str, title: Optional[str]) -> Optional[ImageRecordDto]:
        try:
            record = self.session.get(ImageRecord, image_id)
            if not record:
                return None
            record.title = title
            record.updated_at = datetime.utcnow()
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as e:
            raise self._fail("update", e)
        return self._to_dto(record)

    def delete(self, image_id: str) -> Optional[ImageRecordDto]:
        try:
            record = self.session.get(ImageRecord, image_id)
            if not record:
                return None
            deleted = self._to_dto(record)
            self.session.delete(record)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e)
        return deleted
