import time
import uuid
from pathlib import Path

from fastapi import UploadFile

from imageproc.utils.files import write_file

DEFAULT_FILENAME = "upload"


class UploadService:
    @staticmethod
    def safe_filename(name: str | None) -> str:
        # drop any client-supplied directories
        name = Path((name or "").replace("\\", "/")).name.strip()
        return name or DEFAULT_FILENAME

    @staticmethod
    def build_stored_filename(original_name: str | None) -> str:
        """``<epoch ms>-<random token>-<name>``, unique per upload even within one millisecond."""
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}-{UploadService.safe_filename(original_name)}"

    @staticmethod
    async def save_upload(file: UploadFile, path: Path) -> int:
        return await write_file(file, path)
