"""Random identifiers for the server instance, requests and generated files."""

import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def generate_prefix() -> str:
    """Fresh identifier with the separators stripped, used as a file-name prefix."""
    return generate_uuid().replace("-", "")
