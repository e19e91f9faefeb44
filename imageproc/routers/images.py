import logging
from pathlib import Path
from typing import List, Union

from fastapi import APIRouter, UploadFile, File, Depends, HTTPException
from fastapi import status
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from starlette.datastructures import UploadFile as StarletteUploadFile

from imageproc.config import Config, get_config
from imageproc.db.image import insert_image, list_images, delete_image
from imageproc.db.models.image import ImageCreate, ImageRecord
from imageproc.db.session import get_images_collection
from imageproc.services.processing_service import ProcessingService
from imageproc.services.upload_service import UploadService
from imageproc.utils.files import delete_file, delete_files

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


class UploadResponse(BaseModel):
    message: str
    image: ImageRecord


class MessageResponse(BaseModel):
    message: str


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_image(
        image: Union[UploadFile, str, None] = File(None),
        collection: AsyncIOMotorCollection = Depends(get_images_collection),
        settings: Config = Depends(get_config),
):
    # a text field or a file part without a filename is not an upload
    if not isinstance(image, StarletteUploadFile) or not image.filename:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "No file uploaded.")

    stored_path = settings.UPLOAD_DIR / UploadService.build_stored_filename(image.filename)
    processed_path = ProcessingService.processed_path(stored_path, settings.PROCESSED_PREFIX)

    try:
        size = await UploadService.save_upload(image, stored_path)
        await ProcessingService.process(stored_path, settings.PROCESSED_PREFIX)

        record = await insert_image(collection, ImageCreate(
            original_name=image.filename,
            filename=stored_path.name,
            path=str(stored_path),
            processed_filename=processed_path.name,
        ))

    except Exception as e:
        logger.exception("Error during image upload and processing")
        for path, result in zip((stored_path, processed_path), await delete_files([stored_path, processed_path])):
            if isinstance(result, BaseException):
                logger.warning("Error deleting file %s: %s", path, result)

        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e)) from e

    logger.info("Stored upload %r as %s (%d bytes)", image.filename, record.filename, size)
    return UploadResponse(message="Image uploaded and processed", image=record)


@router.get("/images", response_model=List[ImageRecord])
async def get_images(collection: AsyncIOMotorCollection = Depends(get_images_collection)):
    try:
        return await list_images(collection)

    except Exception as e:
        logger.exception("Error fetching images")
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error fetching images.") from e


@router.delete("/delete/{image_id}", response_model=MessageResponse)
async def delete(
        image_id: str,
        collection: AsyncIOMotorCollection = Depends(get_images_collection),
        settings: Config = Depends(get_config),
):
    try:
        record = await delete_image(collection, image_id)

    except Exception as e:
        logger.exception("Error deleting image %s", image_id)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error deleting image.") from e

    if record is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Image not found.")

    # The record is gone at this point; disk cleanup is best-effort.
    for path in (Path(record.path), settings.UPLOAD_DIR / record.processed_filename):
        try:
            await delete_file(path)
        except OSError as e:
            logger.error("Error deleting file %s: %s", path, e)

    logger.info("Deleted image %s", record.id)
    return MessageResponse(message="Image deleted successfully")
