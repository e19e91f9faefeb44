import logging

import pymongo
from fastapi import Depends, FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from imageproc.config import DEFAULT_MONGODB_DB, Config

logger = logging.getLogger(__name__)

IMAGES_COLLECTION = "images"


async def connect_mongo(app: FastAPI, settings: Config) -> None:
    client = AsyncIOMotorClient(
        settings.MONGODB_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    db = client[settings.MONGODB_DB] if settings.MONGODB_DB else client.get_default_database(DEFAULT_MONGODB_DB)

    app.state.mongo_client = client
    app.state.db = db

    # The client connects lazily; an unreachable server is reported, not fatal.
    try:
        await client.admin.command("ping")
        await db[IMAGES_COLLECTION].create_index([("createdAt", pymongo.DESCENDING)])
        logger.info("MongoDB connected (database=%s)", db.name)
    except PyMongoError as e:
        logger.error("MongoDB connection error: %s", e)


def close_mongo(app: FastAPI) -> None:
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("MongoDB connection closed")


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db


def get_images_collection(db: AsyncIOMotorDatabase = Depends(get_db)) -> AsyncIOMotorCollection:
    return db[IMAGES_COLLECTION]
