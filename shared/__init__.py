"""
Shared utilities for the file operations service.

This package contains common functionality used by the service and its launcher:
- logging_config: consistent stdout/file logging setup
- identifiers: random server, request and file-prefix identifiers
"""
