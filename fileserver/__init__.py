"""
File Operations Service

A small HTTP utility service for test harnesses.
Responsibilities:
- Write, read, list and delete files on the host filesystem
- Bulk-generate filler files of a target total size
- Forward JSON-described HTTP requests and relay the upstream response
"""

__version__ = "1.0.0"
