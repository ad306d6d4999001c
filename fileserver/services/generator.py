"""
Bulk filler-file generation behind /generateFiles.

A request for N megabytes is split into N // 10 files of 10 MB and, when
N % 10 > 0, one trailing file of the remainder:

    <prefix>_file_1.txt ... <prefix>_file_<k>.txt, <prefix>_file_last.txt

Filler content is FILLER_PATTERN repeated a whole number of times, so each
file is the requested size rounded down to a multiple of the pattern length
(36 bytes). Files are written one at a time; a failure leaves the files
already written in place.
"""

import logging
import os
import re
from typing import List, Tuple

from fileserver.config import FILLER_PATTERN, FULL_FILE_SIZE_MB
from fileserver.errors import BadRequestError, InternalError
from fileserver.services.file_ops import write_bytes
from shared.identifiers import generate_prefix

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"[+-]?[0-9]+")

BYTES_PER_MB = 1024 * 1024


def parse_size_mb(raw: str) -> int:
    """Parse the sizeInMB form value; anything but a base-10 integer is a bad request."""
    if raw is None or not _SIZE_RE.fullmatch(raw):
        raise BadRequestError("Invalid size value")
    return int(raw)


def filler_content(size_mb: int) -> bytes:
    repeat_count = (size_mb * BYTES_PER_MB) // len(FILLER_PATTERN)
    return FILLER_PATTERN * repeat_count


def plan_files(dir_path: str, size_mb: int, prefix: str) -> List[Tuple[str, int]]:
    """Return (path, size_mb) for every file a request of `size_mb` produces, in write order."""
    # zero or negative sizes produce nothing
    if size_mb <= 0:
        return []

    full_files, remainder_mb = divmod(size_mb, FULL_FILE_SIZE_MB)

    plan = [
        (os.path.join(dir_path, f"{prefix}_file_{i}.txt"), FULL_FILE_SIZE_MB)
        for i in range(1, full_files + 1)
    ]
    if remainder_mb > 0:
        plan.append((os.path.join(dir_path, f"{prefix}_file_last.txt"), remainder_mb))
    return plan


def generate_files(dir_path: str, size_mb: int) -> List[str]:
    """
    Write the filler files for `size_mb` megabytes under `dir_path`.
    
    Args:
        dir_path: Existing target directory (not created)
        size_mb: Total size in whole megabytes
    
    Returns:
        Paths written, in order
    
    Raises:
        BadRequestError: empty dir_path
        InternalError: first write failure; later files are not attempted
    """
    if not dir_path:
        raise BadRequestError("dirPath is required")

    plan = plan_files(dir_path, size_mb, generate_prefix())
    written = []
    content_cache = {}

    for path, file_size_mb in plan:
        if file_size_mb not in content_cache:
            content_cache[file_size_mb] = filler_content(file_size_mb)
        try:
            write_bytes(path, content_cache[file_size_mb])
        except OSError as e:
            logger.error(f"Generation aborted after {len(written)}/{len(plan)} files: {e}")
            raise InternalError(f"Unable to write to file: {e}")
        written.append(path)
        logger.debug(f"Generated {path} ({file_size_mb} MB)")

    return written
