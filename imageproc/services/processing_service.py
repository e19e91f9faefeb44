from pathlib import Path

from imageproc.utils.files import copy_file


class ProcessingService:
    """Stand-in for real image processing: the output is a byte-identical copy."""

    @staticmethod
    def processed_filename(filename: str, prefix: str) -> str:
        return f"{prefix}{filename}"

    @staticmethod
    def processed_path(source: Path, prefix: str) -> Path:
        return source.with_name(ProcessingService.processed_filename(source.name, prefix))

    @staticmethod
    async def process(source: Path, prefix: str) -> Path:
        target = ProcessingService.processed_path(source, prefix)
        await copy_file(source, target)
        return target
