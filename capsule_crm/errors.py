"""Errors raised by the CapsuleCRM client"""
from typing import Dict, List, Optional


class CapsuleCRMError(Exception):
    """Base class for all client errors"""


class RecordInvalid(CapsuleCRMError):
    """Raised by the *_or_raise operations when a record fails validation"""

    def __init__(self, record):
        self.record = record
        self.errors: Dict[str, List[str]] = dict(record.errors)
        super().__init__(f"Validation failed: {', '.join(self.full_messages)}")

    @property
    def full_messages(self) -> List[str]:
        return [
            f"{field.replace('_', ' ').capitalize()} {message}"
            for field, messages in self.errors.items()
            for message in messages
        ]


class ResponseError(CapsuleCRMError):
    """Non-2xx response from the CapsuleCRM API"""

    def __init__(self, status_code: int, body: Optional[str] = None, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        message = f"CapsuleCRM API returned {status_code}"
        if url:
            message += f" for {url}"
        if body:
            message += f": {body}"
        super().__init__(message)


class BadRequest(ResponseError):
    pass


class Unauthorized(ResponseError):
    pass


class NotFound(ResponseError):
    pass


class InternalServerError(ResponseError):
    pass


STATUS_ERRORS = {
    400: BadRequest,
    401: Unauthorized,
    404: NotFound,
    500: InternalServerError,
}


def error_for_status(status_code: int, body: Optional[str] = None, url: Optional[str] = None) -> ResponseError:
    """Build the ResponseError subclass matching an HTTP status code"""
    error_class = STATUS_ERRORS.get(status_code, ResponseError)
    return error_class(status_code, body=body, url=url)
