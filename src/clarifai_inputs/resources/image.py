"""
Image payloads attached to inputs.

``Image`` is the ``data`` object of an input: the picture itself plus the
concepts and free-form metadata the caller attaches to it.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, List, Optional, Union

from PIL import Image as PILImage
from pydantic import BaseModel

from ..client.errors import InvalidCrop
from ..utils.image_converter import to_base64


class Concept(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    value: Optional[Any] = None


class ImageData(BaseModel):
    url: Optional[str] = None
    base64: Optional[str] = None
    crop: Optional[List[float]] = None
    allow_duplicate_url: Optional[bool] = None


class Image(BaseModel):
    image: Optional[ImageData] = None
    concepts: Optional[List[Concept]] = None
    metadata: Optional[Any] = None

    @classmethod
    def from_url(cls, url: str, allow_duplicate_url: bool = False) -> "Image":
        return cls(image=ImageData(url=url, allow_duplicate_url=allow_duplicate_url or None))

    @classmethod
    def from_base64(cls, data: Union[bytes, str]) -> "Image":
        """Wrap raw image bytes, or an already encoded base64 string."""
        encoded = to_base64(data) if isinstance(data, bytes) else data
        return cls(image=ImageData(base64=encoded))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Image":
        return cls(image=ImageData(base64=to_base64(Path(path))))

    @classmethod
    def from_pil(cls, img: PILImage.Image) -> "Image":
        return cls(image=ImageData(base64=to_base64(img)))

    def add_crop(self, top: float, left: float, bottom: float, right: float) -> None:
        """Restrict recognition to a region, given as fractions of the image size."""
        crop = [top, left, bottom, right]
        for v in crop:
            if not 0 <= v <= 1:
                raise InvalidCrop(f"Crop values must be within [0, 1], got {crop}")
        if self.image is None:
            self.image = ImageData()
        self.image.crop = crop

    def add_concept(self, concept: Concept) -> None:
        if self.concepts is None:
            self.concepts = []
        self.concepts.append(concept)
