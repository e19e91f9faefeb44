from typing import List, Optional

import pymongo
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from imageproc.db.models.image import ImageCreate, ImageRecord


async def insert_image(collection: AsyncIOMotorCollection, image: ImageCreate) -> ImageRecord:
    document = image.model_dump(by_alias=True)
    result = await collection.insert_one(document)
    return ImageRecord.model_validate({**document, "_id": result.inserted_id})


async def list_images(collection: AsyncIOMotorCollection) -> List[ImageRecord]:
    cursor = collection.find().sort([("createdAt", pymongo.DESCENDING), ("_id", pymongo.DESCENDING)])
    return [ImageRecord.model_validate(document) async for document in cursor]


async def delete_image(collection: AsyncIOMotorCollection, image_id: str) -> Optional[ImageRecord]:
    """Delete and return the record, or None if no record has ``image_id``."""
    if not ObjectId.is_valid(image_id):
        return None

    document = await collection.find_one_and_delete({"_id": ObjectId(image_id)})
    if document is None:
        return None

    return ImageRecord.model_validate(document)
