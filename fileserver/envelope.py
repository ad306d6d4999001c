"""
Response envelope and identity state.

The server id is set once by the startup hook in service.py, before the
listener accepts connections, and is read-only afterwards.
"""

import logging
from typing import Optional

from fastapi import Request

from fileserver.models import EnvelopeData, ResponseEnvelope
from shared.identifiers import generate_uuid
from shared.logging_config import RequestLogAdapter

logger = logging.getLogger(__name__)

_server_id: Optional[str] = None


def init_server_id() -> str:
    """Create the process-wide server id (no-op if it already exists)"""
    global _server_id
    if _server_id is None:
        _server_id = generate_uuid()
        logger.info(f"Server identity created serverId={_server_id}")
    return _server_id


def get_server_id() -> str:
    if _server_id is None:
        raise RuntimeError("Server identity not initialized; the startup hook has not run")
    return _server_id


def new_request_id(request: Request) -> str:
    """FastAPI dependency: fresh id per request, also kept on request.state for error logging"""
    request_id = generate_uuid()
    request.state.request_id = request_id
    return request_id


def build_envelope(message: str, request_id: str, data: EnvelopeData = None) -> ResponseEnvelope:
    return ResponseEnvelope(
        message=message,
        server_id=get_server_id(),
        request_id=request_id,
        data=data,
    )


def request_logger(base: logging.Logger, request_id: str) -> RequestLogAdapter:
    """Logger that tags every line with this request's id and the server id"""
    return RequestLogAdapter(base, {"requestId": request_id, "serverId": get_server_id()})
