import logging

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from src.database import get_reviews_collection
from src.errors import StorageError
from src.models.review import Review

LOGGER = logging.getLogger("review_store")


class ReviewStore:
    def __init__(self, collection: AsyncIOMotorCollection | None = None) -> None:
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self._collection is not None:
            return self._collection
        return get_reviews_collection()

    async def insert(self, review: Review) -> None:
        document = review.model_dump(mode="python")
        document["status"] = review.status.value
        try:
            await self.collection.insert_one(document)
        except PyMongoError as exc:
            LOGGER.error("Review insert failed business_id=%s: %s", review.business_id, exc)
            raise StorageError(str(exc)) from exc
