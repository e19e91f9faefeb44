import asyncio
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from imageproc.config import config

CHUNK_SIZE = 1024 * 1024

IO_LIMIT = config.MAX_CONCURRENT_IO
SEM = asyncio.Semaphore(IO_LIMIT)


def configure_io_limit(limit: int) -> None:
    """Resize the bound on concurrent file operations. Call before serving requests."""
    global IO_LIMIT, SEM

    if limit < 1:
        raise ValueError(f"I/O limit must be at least 1, got {limit}")

    IO_LIMIT = limit
    SEM = asyncio.Semaphore(limit)


async def write_file(file: UploadFile, path: Path) -> int:
    """Stream an upload to ``path`` and return the number of bytes written."""
    async with SEM:
        path.parent.mkdir(parents=True, exist_ok=True)

        size = 0
        async with aiofiles.open(path, "wb") as f:
            while chunk := await file.read(CHUNK_SIZE):
                size += len(chunk)
                await f.write(chunk)

        return size


async def copy_file(src: Path, dst: Path) -> None:
    async with SEM:
        dst.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(src, "rb") as fin, aiofiles.open(dst, "wb") as fout:
            while chunk := await fin.read(CHUNK_SIZE):
                await fout.write(chunk)


async def delete_file(path: Path) -> bool:
    """Remove ``path``. Returns False if it was already gone; other OS errors propagate."""
    async with SEM:
        try:
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            return False


async def delete_files(paths: List[Path]) -> List[bool | BaseException]:
    return await asyncio.gather(*(delete_file(p) for p in paths), return_exceptions=True)
