"""
Filesystem operations behind /writeFile, /readFile, /listFiles and /deleteFile.

Each function performs one or two filesystem calls and classifies the first
failure as a FileServerError. Access is not synchronized: concurrent writes to
the same path are last-writer-wins and a concurrent read may see a partial file.
"""

import logging
import os
from typing import List

from fileserver.config import DIR_MODE, FILE_MODE
from fileserver.errors import BadRequestError, InternalError, NotFoundError
from fileserver.models import FileEntry

logger = logging.getLogger(__name__)


def _require_path(value: str, field_name: str) -> None:
    if not value:
        raise BadRequestError(f"{field_name} is required")


def write_bytes(path: str, data: bytes, mode: int = FILE_MODE) -> None:
    """Create or truncate `path` and write `data` as its entire contents."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


def write_file(file_path: str, file_content: str) -> None:
    """
    Write `file_content` to `file_path`, creating parent directories first.
    
    Raises:
        BadRequestError: empty path
        InternalError: directory creation or write failure
    """
    _require_path(file_path, "filePath")

    dir_path = os.path.dirname(file_path)
    if dir_path not in ("", "."):
        try:
            os.makedirs(dir_path, mode=DIR_MODE, exist_ok=True)
        except OSError as e:
            raise InternalError(f"Unable to create directory: {e}")

    try:
        write_bytes(file_path, file_content.encode("utf-8"))
    except OSError as e:
        raise InternalError(f"Unable to write to file: {e}")


def read_file(file_path: str) -> str:
    """
    Return the full contents of `file_path` as text.
    
    Raises:
        BadRequestError: empty path
        NotFoundError: file does not exist
        InternalError: any other read failure
    """
    _require_path(file_path, "filePath")

    try:
        with open(file_path, "rb") as f:
            data = f.read()
    except FileNotFoundError:
        raise NotFoundError("File not found")
    except OSError as e:
        raise InternalError(f"Unable to read file: {e}")

    return data.decode("utf-8", errors="replace")


def list_files(dir_path: str) -> List[FileEntry]:
    """
    List the direct children of `dir_path` with their sizes in bytes.

    One failing stat aborts the whole listing; partial results are dropped.
    """
    _require_path(dir_path, "dirPath")

    try:
        with os.scandir(dir_path) as it:
            names = sorted(entry.name for entry in it)
    except OSError as e:
        raise InternalError(f"Unable to read directory: {e}")

    entries = []
    for name in names:
        entry_path = os.path.join(dir_path, name)
        try:
            stat_result = os.stat(entry_path)
        except OSError as e:
            raise InternalError(f"Unable to get info for file {entry_path}: {e}")
        entries.append(FileEntry(file_name=name, size=stat_result.st_size))

    logger.debug(f"Listed {len(entries)} entries in {dir_path}")
    return entries


def delete_file(file_path: str) -> None:
    """Remove one file, or one empty directory."""
    _require_path(file_path, "filePath")

    try:
        if os.path.isdir(file_path) and not os.path.islink(file_path):
            os.rmdir(file_path)
        else:
            os.remove(file_path)
    except FileNotFoundError as e:
        raise NotFoundError(f"File not found: {e}")
    except OSError as e:
        raise InternalError(f"Unable to delete file: {e}")
