import os


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


SERVICE_NAME = "fileserver"
SERVICE_PORT = _int_env("FILESERVER_PORT", 8081)
BIND_HOST = str(os.getenv("FILESERVER_BIND_HOST", "0.0.0.0")).strip()
PROXY_DEFAULT_TIMEOUT_SECONDS = _int_env("FILESERVER_PROXY_TIMEOUT", 30)
LOG_LEVEL = str(os.getenv("FILESERVER_LOG_LEVEL", "INFO")).strip().upper()
LOG_FILE = str(os.getenv("FILESERVER_LOG_FILE", "")).strip() or None

# Bulk generation sizing
FULL_FILE_SIZE_MB = 10
FILLER_PATTERN = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

FILE_MODE = 0o644
DIR_MODE = 0o755
