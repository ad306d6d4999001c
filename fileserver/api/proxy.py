"""
Proxy API

POST /proxy forwards one JSON-described HTTP request and wraps the upstream
status, headers and body in a ResponseEnvelope.

Request:
{
    "url": "http://example.com/api",
    "method": "POST",
    "headers": {"Accept": ["application/json"]},
    "body": "{\"k\": 1}",
    "timeoutSeconds": 10
}
"""

import logging

from fastapi import APIRouter, Depends

from fileserver import config
from fileserver.envelope import build_envelope, new_request_id, request_logger
from fileserver.models import OutboundRequest, ResponseEnvelope
from fileserver.services.forwarder import HTTPForwarder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])

forwarder = HTTPForwarder(default_timeout_seconds=config.PROXY_DEFAULT_TIMEOUT_SECONDS)


@router.post("/proxy", response_model=ResponseEnvelope)
def proxy_request(outbound: OutboundRequest, request_id: str = Depends(new_request_id)):
    log = request_logger(logger, request_id)
    log.info("Proxying HTTP request", fields={"url": outbound.url, "method": outbound.method or "GET"})
    result = forwarder.forward(outbound)
    log.info("Proxy request completed", fields={"url": outbound.url, "status": result.status_code})
    return build_envelope("Proxy request completed", request_id, result)
