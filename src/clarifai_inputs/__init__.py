"""
Client library for the Clarifai image-recognition API.

Build requests for input resources through a ``Session`` and send them with
``Request.run()``.
"""

from .client.errors import (
    ClarifaiError,
    InputLimitReached,
    InvalidCrop,
    RequestError,
    RequestRetryable,
    RequestTimeout,
)
from .client.request import Request
from .client.session import Session
from .client.config import ClientConfig, load_config
from .constants import INPUT_LIMIT, PUBLIC_MODEL_GENERAL
from .resources.image import Concept, Image, ImageData
from .resources.inputs import Input, Inputs
from .resources.status import ServiceStatus

__all__ = [
    "ClarifaiError",
    "InputLimitReached",
    "InvalidCrop",
    "RequestError",
    "RequestRetryable",
    "RequestTimeout",
    "Request",
    "Session",
    "ClientConfig",
    "load_config",
    "INPUT_LIMIT",
    "PUBLIC_MODEL_GENERAL",
    "Concept",
    "Image",
    "ImageData",
    "Input",
    "Inputs",
    "ServiceStatus",
]
