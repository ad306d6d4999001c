"""
File API

Filesystem endpoints. POST fields come from the form body or the query
string (see api/params.py); GET/DELETE take query parameters. Every success
is a ResponseEnvelope.

Endpoints:
- POST   /writeFile      filePath, fileContent
- GET    /readFile       filePath
- GET    /listFiles      dirPath
- DELETE /deleteFile     filePath
- POST   /generateFiles  dirPath, sizeInMB
"""

import logging

from fastapi import APIRouter, Depends, Query

from fileserver.api.params import form_value
from fileserver.envelope import build_envelope, new_request_id, request_logger
from fileserver.models import FileContentData, ResponseEnvelope
from fileserver.services import file_ops, generator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


@router.post("/writeFile", response_model=ResponseEnvelope)
def write_file(
    file_path: str = Depends(form_value("filePath")),
    file_content: str = Depends(form_value("fileContent")),
    request_id: str = Depends(new_request_id),
):
    log = request_logger(logger, request_id)
    # NOTE: logs raw file content
    log.info("Writing file", fields={"filePath": file_path, "fileContent": file_content})
    file_ops.write_file(file_path, file_content)
    log.info("File written", fields={"filePath": file_path})
    return build_envelope("File written successfully", request_id)


@router.get("/readFile", response_model=ResponseEnvelope)
def read_file(
    file_path: str = Query("", alias="filePath"),
    request_id: str = Depends(new_request_id),
):
    request_logger(logger, request_id).info("Reading file", fields={"filePath": file_path})
    content = file_ops.read_file(file_path)
    return build_envelope("File read successfully", request_id, FileContentData(file_content=content))


@router.get("/listFiles", response_model=ResponseEnvelope)
def list_files(
    dir_path: str = Query("", alias="dirPath"),
    request_id: str = Depends(new_request_id),
):
    request_logger(logger, request_id).info("Listing files", fields={"dirPath": dir_path})
    entries = file_ops.list_files(dir_path)
    return build_envelope("Files listed successfully", request_id, entries)


@router.delete("/deleteFile", response_model=ResponseEnvelope)
def delete_file(
    file_path: str = Query("", alias="filePath"),
    request_id: str = Depends(new_request_id),
):
    request_logger(logger, request_id).info("Deleting file", fields={"filePath": file_path})
    file_ops.delete_file(file_path)
    return build_envelope("File deleted successfully", request_id)


@router.post("/generateFiles", response_model=ResponseEnvelope)
def generate_files(
    dir_path: str = Depends(form_value("dirPath")),
    size_in_mb: str = Depends(form_value("sizeInMB")),
    request_id: str = Depends(new_request_id),
):
    """
    Generate filler files totalling sizeInMB megabytes under dirPath.
    Blocks until every file is written.
    """
    log = request_logger(logger, request_id)
    log.info("Generating files", fields={"dirPath": dir_path, "sizeInMB": size_in_mb})
    size_mb = generator.parse_size_mb(size_in_mb)
    written = generator.generate_files(dir_path, size_mb)
    log.info("Files generated", fields={"dirPath": dir_path, "count": len(written)})
    return build_envelope("Files generated successfully", request_id)
