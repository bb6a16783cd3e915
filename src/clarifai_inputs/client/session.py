from __future__ import annotations
from os import getenv
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential_jitter, retry_if_exception

from .config import API_KEY_ENV, load_config
from .errors import RequestError, RequestRetryable, RequestTimeout
from .request import Request
from ..constants import DEFAULT_API_VERSION, DEFAULT_BASE_URL, RETRYABLE_STATUS
from ..resources.inputs import InputsEndpoints

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, (RequestRetryable, RequestTimeout))


class Session(InputsEndpoints):
    """
    Authenticated connection to the Clarifai API.

    Builders inherited from ``InputsEndpoints`` return ``Request`` objects bound
    to this session; ``execute`` sends them.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key or getenv(API_KEY_ENV)
        if not self.api_key:
            raise ValueError(f"No API key: pass api_key or set {API_KEY_ENV}")
        self.base_url = base_url
        self.api_version = api_version
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)
        logger.info(f"Created session for {self.base_url}/{self.api_version}")

    @classmethod
    def from_config(cls, config_path: Union[Path, str], client: Optional[httpx.Client] = None) -> "Session":
        cfg = load_config(config_path)
        return cls(
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            api_version=cfg.api_version,
            timeout=cfg.timeout,
            client=client,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Key {self.api_key}",
            "Content-Type": "application/json",
        }

    def execute(self, request: Request) -> Dict[str, Any]:
        try:
            return self._send(request)
        except RequestError as e:
            logger.error(f"{request.method} {request.path} failed: {e}")
            raise

    @retry(reraise=True, wait=wait_exponential_jitter(initial=0.5, max=4), stop=stop_after_attempt(3), retry=retry_if_exception(_is_retryable))
    def _send(self, request: Request) -> Dict[str, Any]:
        logger.debug(f"Sending {request.method} {request.url}")
        try:
            response = self.client.request(
                request.method,
                request.url,
                json=request.body(),
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout on {request.method} {request.path}")
            raise RequestTimeout(f"Clarifai timeout after {self.timeout}s: {e}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            msg = f"Clarifai API error {status} on {request.method} {request.path}"
            if status in RETRYABLE_STATUS:
                logger.warning(msg)
                raise RequestRetryable(msg, status_code=status, body=e.response.text) from e
            raise RequestError(msg, status_code=status, body=e.response.text) from e
        except httpx.TransportError as e:
            logger.warning(f"Transport error on {request.method} {request.path}: {e}")
            raise RequestRetryable(f"Clarifai connection failed: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"Invalid JSON from Clarifai: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
            logger.info("Closed session HTTP client")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
