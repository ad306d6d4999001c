"""
Error taxonomy for the file operations service.

Services raise these; service.py turns them into plain text responses
carrying the status code of the class.
"""


class FileServerError(Exception):
    """Base error; the message is sent to the client as the response body."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(FileServerError):
    status_code = 400


class NotFoundError(FileServerError):
    status_code = 404


class InternalError(FileServerError):
    status_code = 500


class BadGatewayError(FileServerError):
    status_code = 502
