from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ObjectId on the way out of Mongo, plain hex string on the wire
ObjectIdStr = Annotated[str, BeforeValidator(str)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImageBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_name: str  # name as sent by the client
    filename: str  # {epoch_ms}-{token}-{original_name}
    path: str  # absolute path of the stored upload
    processed_filename: str  # processed_{filename}


class ImageCreate(ImageBase):
    created_at: datetime = Field(default_factory=_utcnow)


class ImageRecord(ImageCreate):
    id: ObjectIdStr = Field(alias="_id")
