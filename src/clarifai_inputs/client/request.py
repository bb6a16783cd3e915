from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel

if TYPE_CHECKING:
    from .session import Session

Payload = Union[BaseModel, Mapping[str, Any]]


@dataclass
class Request:
    session: "Session"
    method: str #GET, POST, PATCH, DELETE
    path: str #relative to the versioned API root, e.g. "inputs/status"
    payload: Optional[Payload] = None

    def set_payload(self, payload: Payload) -> None:
        self.payload = payload

    def body(self) -> Optional[Dict[str, Any]]:
        """JSON-ready body, with unset optional fields left out."""
        if self.payload is None:
            return None
        if isinstance(self.payload, BaseModel):
            return self.payload.model_dump(mode="json", exclude_none=True)
        return dict(self.payload)

    @property
    def url(self) -> str:
        return f"{self.session.base_url.rstrip('/')}/{self.session.api_version}/{self.path.lstrip('/')}"

    def run(self) -> Dict[str, Any]:
        return self.session.execute(self)
