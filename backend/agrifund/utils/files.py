# backend/agrifund/utils/files.py
from pathlib import Path
from uuid import uuid4
from fastapi import UploadFile
from .logging import service_logger

CHUNK_SIZE = 64 * 1024


class UploadTooLargeError(Exception):
    """Raised when an upload exceeds the configured byte cap"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"File exceeds the {limit} byte upload limit")


async def save_upload_file(upload_file: UploadFile, directory: Path, max_bytes: int | None = None) -> Path:
    """Save an uploaded file with a unique name and return the path"""
    directory.mkdir(parents=True, exist_ok=True)
    file_extension = Path(upload_file.filename or "").suffix
    unique_filename = f"{uuid4()}{file_extension}"
    file_path = directory / unique_filename

    written = 0
    try:
        with file_path.open("wb") as buffer:
            while chunk := upload_file.file.read(CHUNK_SIZE):
                written += len(chunk)
                if max_bytes is not None and written > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                buffer.write(chunk)
    except UploadTooLargeError:
        file_path.unlink(missing_ok=True)
        raise

    return file_path

async def delete_file(file_path: Path):
    """Delete a file if it exists, logging failures"""
    try:
        if file_path.exists():
            file_path.unlink()
    except OSError as e:
        service_logger.error(f"Error deleting file {file_path}: {e}")

def get_relative_path(absolute_path: Path, base_path: Path) -> str:
    """Convert absolute path to relative path for database storage"""
    absolute_path = Path(absolute_path).absolute()
    base_path = Path(base_path).absolute()
    return absolute_path.relative_to(base_path).as_posix()
