"""
Request parameter dependencies.

POST endpoints read their fields the way an HTML form handler does: a field
present in the urlencoded/multipart body wins, otherwise the query string is
used, otherwise the value is empty. File uploads are not field values.
"""

from typing import Callable

from fastapi import Request


def form_value(name: str) -> Callable:
    async def dependency(request: Request) -> str:
        form = await request.form()
        value = form.get(name)
        if isinstance(value, str):
            return value
        return request.query_params.get(name, "")

    dependency.__name__ = f"form_value_{name}"
    return dependency
