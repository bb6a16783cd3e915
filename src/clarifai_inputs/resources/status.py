from typing import Optional

from pydantic import BaseModel, Field

from ..constants import STATUS_SUCCESS


class ServiceStatus(BaseModel):
    """Status block the API attaches to responses and to each input."""
    code: int = Field(..., description="Clarifai status code")
    description: str = Field("", description="Human-readable status")
    details: Optional[str] = Field(None, description="Additional failure details")

    @property
    def is_success(self) -> bool:
        return self.code == STATUS_SUCCESS
