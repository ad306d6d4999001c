"""
Logging for the file operations service.

Two pieces:
- setup_logging: root configuration used by the launcher (stdout plus an
  optional log file)
- RequestLogAdapter: per-request logger that appends `key=value` fields,
  always ending with the request id and server id, so handlers log

      Writing file filePath=/tmp/a.txt requestId=... serverId=...
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _format_value(value: Any) -> str:
    if isinstance(value, str) and (not value or any(c.isspace() or c in '="' for c in value)):
        return repr(value)
    return str(value)


def format_fields(fields: Dict[str, Any]) -> str:
    """Render fields as `key=value` pairs; strings that need it are quoted."""
    return " ".join(f"{key}={_format_value(value)}" for key, value in fields.items())


class RequestLogAdapter(logging.LoggerAdapter):
    """
    Logger bound to one request.

    `extra` holds the identity fields (requestId, serverId). Call sites add
    operation fields with the `fields` keyword:

        log.info("Reading file", fields={"filePath": path})
    """

    def process(self, msg, kwargs):
        fields = dict(kwargs.pop("fields", None) or {})
        fields.update(self.extra)
        if fields:
            msg = f"{msg} {format_fields(fields)}"
        return msg, kwargs


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    level_name = level.strip().upper()
    resolved = logging.getLevelName(level_name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return resolved


def setup_logging(
    component_name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger for a service component.

    Args:
        component_name: Shown upper-cased in every line (e.g. 'fileserver')
        level: Number or name ('DEBUG', 'info', ...)
        log_file: Optional extra log file; its directory is created
    """
    level = _resolve_level(level)
    line_format = f'[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=line_format, datefmt=DATE_FORMAT, handlers=handlers, force=True)

    logger = logging.getLogger(component_name)
    logger.info(f"Logging initialized level={logging.getLevelName(level)} logFile={log_file or '-'}")
    return logger
