"""
File Operations Service Launcher

Starts the file operations HTTP service from the fileserver/ package.

This service provides:
- File write/read/list/delete on the host filesystem
- Bulk filler-file generation for capacity tests
- JSON-described HTTP request forwarding

Usage:
    python scripts/run_fileserver_service.py --host 0.0.0.0 --port 8081

Environment Variables:
    FILESERVER_PORT: Listen port (default: 8081)
    FILESERVER_BIND_HOST: Bind address (default: 0.0.0.0)
    FILESERVER_LOG_LEVEL: Log level (default: INFO)
    FILESERVER_LOG_FILE: Optional log file path
    FILESERVER_PROXY_TIMEOUT: Default /proxy timeout in seconds (default: 30)
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from fileserver import config
from fileserver.startup_profile import StartupProfile, validate_fileserver_profile
from shared.logging_config import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the file operations HTTP service")
    parser.add_argument("--host", default=config.BIND_HOST)
    parser.add_argument("--port", type=int, default=config.SERVICE_PORT)
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-file", default=config.LOG_FILE)
    args = parser.parse_args()

    logger = setup_logging(config.SERVICE_NAME, level=args.log_level, log_file=args.log_file)

    try:
        validate_fileserver_profile(StartupProfile(role="FILESERVER", host=args.host, port=args.port))
    except ValueError as e:
        logger.error(f"Invalid startup profile: {e}")
        sys.exit(2)

    logger.info(f"API Address: {args.host}:{args.port}")

    # The app reads these in its startup hook
    config.SERVICE_PORT = args.port
    config.BIND_HOST = args.host

    uvicorn.run("fileserver.service:app", host=args.host, port=args.port, reload=False, log_config=None)


if __name__ == "__main__":
    main()
