from __future__ import annotations
from typing import Optional

#unified client errors
class ClarifaiError(RuntimeError): ...
class InputLimitReached(ClarifaiError): ...
class InvalidCrop(ClarifaiError): ...


class RequestError(ClarifaiError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

class RequestRetryable(RequestError): ...
class RequestTimeout(RequestError): ...
