"""
File Operations Service Entrypoint

FastAPI application for the file operations service.
Includes the API routers, plain text error handlers and startup initialization.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from fileserver import __version__, config
from fileserver.api import files, proxy
from fileserver.envelope import get_server_id, init_server_id, request_logger
from fileserver.errors import FileServerError
from fileserver.startup_profile import StartupProfile, validate_fileserver_profile
from shared.identifiers import generate_uuid

logger = logging.getLogger(__name__)

app = FastAPI(title="File Operations Service", version=__version__)

# Include all API routers
app.include_router(files.router)
app.include_router(proxy.router)


@app.on_event("startup")
def startup_init():
    """Validate the bind profile and fix the server identity before serving"""
    validate_fileserver_profile(
        StartupProfile(role="FILESERVER", host=config.BIND_HOST, port=config.SERVICE_PORT)
    )
    server_id = init_server_id()
    logger.info(f"Starting server serverId={server_id}")


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or generate_uuid()


def _plain_error(request: Request, status_code: int, message: str, headers=None) -> PlainTextResponse:
    request_logger(logger, _request_id(request)).error(
        f"{request.method} {request.url.path} failed",
        fields={"status": status_code, "error": message},
    )
    return PlainTextResponse(message, status_code=status_code, headers=headers)


@app.exception_handler(FileServerError)
async def file_server_error_handler(request: Request, exc: FileServerError):
    return _plain_error(request, exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes (404) and wrong methods (405)
    return _plain_error(request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return _plain_error(request, 400, f"Invalid request body: {details}")


@app.get("/")
def root():
    return {
        "service": config.SERVICE_NAME,
        "serverId": get_server_id(),
        "message": "File operations service running",
    }
