"""
HTTP Forwarder

Executes one outbound HTTP request described by an OutboundRequest and
returns the upstream status, headers and body. Single attempt, no retries.

The timeout is a total deadline covering connect, headers and body. The
exchange runs on a worker thread; the caller waits at most `timeout` seconds
for it and gives up on the worker when the deadline passes.

Failure mapping:
- request cannot be built (missing URL, bad URL, bad method or header) -> BadRequestError
- transport failure, or deadline hit before the response headers       -> BadGatewayError
- body read failure, or deadline hit while reading the body            -> InternalError
"""

import logging
import re
import threading
from typing import Dict, List, Optional

import requests
from requests.structures import CaseInsensitiveDict

from fileserver.errors import BadGatewayError, BadRequestError, InternalError
from fileserver.models import OutboundRequest, OutboundResponse

logger = logging.getLogger(__name__)

# RFC 9110 token characters
_METHOD_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _merge_headers(headers: Dict[str, List[str]]) -> CaseInsensitiveDict:
    """
    Fold multi-valued headers into one comma-separated field per name.

    Values are sent as UTF-8 bytes so text outside Latin-1 goes out as-is.
    """
    merged = CaseInsensitiveDict()
    for name, values in headers.items():
        for value in values:
            encoded = value.encode("utf-8")
            if name in merged:
                merged[name] = merged[name] + b", " + encoded
            else:
                merged[name] = encoded
    return merged


def _response_headers(response: requests.Response) -> Dict[str, List[str]]:
    """Every received value per header name, in arrival order"""
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return {name: list(raw_headers.getlist(name)) for name in raw_headers}
    return {name: [value] for name, value in response.headers.items()}


class _Exchange:
    """State shared between the caller and the worker thread"""

    def __init__(self):
        self.response: Optional[requests.Response] = None
        self.content: Optional[bytes] = None
        self.error: Optional[BaseException] = None
        self.done = threading.Event()


class HTTPForwarder:
    """Forward JSON-described requests to arbitrary upstream servers"""

    def __init__(self, default_timeout_seconds: int = 30):
        """
        Initialize forwarder.

        Args:
            default_timeout_seconds: Timeout used when the request carries none
        """
        self.default_timeout_seconds = default_timeout_seconds
        logger.info(f"HTTP forwarder initialized (default_timeout={default_timeout_seconds}s)")

    def resolve_timeout(self, timeout_seconds: Optional[int]) -> int:
        if not timeout_seconds or timeout_seconds <= 0:
            return self.default_timeout_seconds
        return timeout_seconds

    def _prepare(self, session: requests.Session, outbound: OutboundRequest) -> requests.PreparedRequest:
        method = outbound.method or "GET"
        if not _METHOD_TOKEN_RE.fullmatch(method):
            raise BadRequestError(f"Failed to create request: invalid method {method!r}")

        body = outbound.body.encode("utf-8") if outbound.body else None
        request = requests.Request(
            method=method,
            url=outbound.url,
            headers=_merge_headers(outbound.headers or {}),
            data=body,
        )
        try:
            return session.prepare_request(request)
        except (requests.RequestException, ValueError) as e:
            raise BadRequestError(f"Failed to create request: {e}")

    def _run_exchange(self, session: requests.Session, prepared: requests.PreparedRequest,
                      timeout: int, exchange: _Exchange) -> None:
        """Worker thread body: send, read the whole body, record the outcome."""
        try:
            settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
            response = session.send(
                prepared,
                timeout=timeout,
                allow_redirects=True,
                stream=True,
                proxies=settings["proxies"],
                verify=settings["verify"],
                cert=settings["cert"],
            )
            exchange.response = response
            try:
                exchange.content = response.content
            finally:
                response.close()
        except Exception as e:
            # re-raised as a FileServerError by forward() in the calling thread
            exchange.error = e
        finally:
            session.close()
            exchange.done.set()

    def forward(self, outbound: OutboundRequest) -> OutboundResponse:
        """
        Execute the outbound request and collect the upstream response.

        Args:
            outbound: Request descriptor; url is required

        Returns:
            OutboundResponse with status code, all header values and text body
        """
        if not outbound.url:
            raise BadRequestError("URL is required")

        timeout = self.resolve_timeout(outbound.timeout_seconds)

        session = requests.Session()
        try:
            prepared = self._prepare(session, outbound)
        except BadRequestError:
            session.close()
            raise

        exchange = _Exchange()
        worker = threading.Thread(
            target=self._run_exchange,
            args=(session, prepared, timeout, exchange),
            name="http-forwarder",
            daemon=True,
        )
        worker.start()

        if not exchange.done.wait(timeout):
            if exchange.response is None:
                logger.error(f"Outbound {prepared.method} {prepared.url} exceeded {timeout}s before response")
                raise BadGatewayError(f"Failed to execute request: timeout of {timeout}s exceeded")
            logger.error(f"Outbound {prepared.method} {prepared.url} exceeded {timeout}s reading body")
            raise InternalError(f"Failed to read response body: timeout of {timeout}s exceeded")

        error = exchange.error
        if error is not None:
            if exchange.response is not None:
                logger.error(f"Reading response from {prepared.url} failed: {error}")
                raise InternalError(f"Failed to read response body: {error}")
            if isinstance(error, requests.RequestException):
                logger.error(f"Outbound {prepared.method} {prepared.url} failed: {error}")
                raise BadGatewayError(f"Failed to execute request: {error}")
            if isinstance(error, (UnicodeError, ValueError)):
                raise BadRequestError(f"Failed to create request: {error}")
            raise error

        response = exchange.response
        content = exchange.content
        logger.debug(f"Outbound {prepared.method} {prepared.url} -> {response.status_code} ({len(content)} bytes)")
        return OutboundResponse(
            status_code=response.status_code,
            headers=_response_headers(response),
            body=content.decode("utf-8", errors="replace"),
        )
