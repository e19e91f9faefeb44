import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Request
from pydantic import BaseModel

load_dotenv()

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/imagemagick"
DEFAULT_MONGODB_DB = "imagemagick"


class Config(BaseModel):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    MONGODB_URI: str = DEFAULT_MONGODB_URI
    MONGODB_DB: Optional[str] = None  # falls back to the database named in MONGODB_URI
    MONGODB_TIMEOUT_MS: int = 5000  # server selection timeout

    # Uploads
    UPLOAD_DIR: Path = Path("uploads")
    PROCESSED_PREFIX: str = "processed_"

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Async I/O
    MAX_CONCURRENT_IO: int = 16


config = Config(
    HOST=os.getenv("HOST", "0.0.0.0"),
    PORT=int(os.getenv("PORT", "5000")),

    MONGODB_URI=os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI),
    MONGODB_DB=os.getenv("MONGODB_DB") or None,
    MONGODB_TIMEOUT_MS=int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),

    UPLOAD_DIR=Path(os.getenv("UPLOAD_DIR", "uploads")),

    CORS_ORIGINS=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],

    LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),

    MAX_CONCURRENT_IO=int(os.getenv("MAX_CONCURRENT_IO", "16")),
)


def get_config(request: Request) -> Config:
    return request.app.state.config


__all__ = ["Config", "config", "get_config"]
