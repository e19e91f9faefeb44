from .models.image import ImageCreate, ImageRecord
from .session import IMAGES_COLLECTION, get_db, get_images_collection

__all__ = ["ImageCreate", "ImageRecord", "IMAGES_COLLECTION", "get_db", "get_images_collection"]
