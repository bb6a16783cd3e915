"""
Input resources and the request builders for the ``inputs`` endpoints.

Builders never touch the network: each one picks a method and path, shapes the
payload and returns a ``Request`` bound to the session. Call ``run()`` on the
result to send it.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
import logging

from pydantic import BaseModel, Field, PrivateAttr

from ..client.errors import InputLimitReached
from ..client.request import Request
from ..constants import INPUT_LIMIT, PUBLIC_MODEL_GENERAL
from .image import Concept, Image
from .status import ServiceStatus

logger = logging.getLogger(__name__)


class Input(BaseModel):
    data: Optional[Image] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    status: Optional[ServiceStatus] = None

    def add_concept(self, name: str, value: Any = None) -> None:
        """Attach a concept to the input; a ``None`` value is left off the wire."""
        if self.data is None:
            self.data = Image()
        self.data.add_concept(Concept(name=name, value=value))

    def set_metadata(self, metadata: Any) -> None:
        # stored under input -> data -> metadata
        if self.data is None:
            self.data = Image()
        self.data.metadata = metadata


class Inputs(BaseModel):
    """Batch of inputs sent in one request, capped at INPUT_LIMIT."""
    inputs: List[Input] = Field(default_factory=list)
    _model_id: str = PrivateAttr(default=PUBLIC_MODEL_GENERAL)

    def __len__(self) -> int:
        return len(self.inputs)

    def add_input(self, image: Optional[Image], input_id: str = "") -> Input:
        if len(self.inputs) >= INPUT_LIMIT:
            raise InputLimitReached(f"Input limit of {INPUT_LIMIT} reached")

        item = Input(data=image)
        # custom ID only if provided
        if input_id:
            item.id = input_id

        self.inputs.append(item)
        return item

    def set_model(self, model_id: str) -> None:
        """Model used by ``predict`` calls."""
        self._model_id = model_id

    @property
    def model_id(self) -> str:
        return self._model_id


class PatchConcepts(BaseModel):
    concepts: List[Concept] = Field(default_factory=list)


class PatchInput(BaseModel):
    id: str
    data: PatchConcepts = Field(default_factory=PatchConcepts)

    def add_concept(self, concept_id: str, value: bool = False, ignore_value: bool = False) -> None:
        concept = Concept(id=concept_id)
        if not ignore_value:
            concept.value = 1 if value else 0
        self.data.concepts.append(concept)


class PatchInputsPayload(BaseModel):
    action: str
    inputs: List[PatchInput] = Field(default_factory=list)


class InputsEndpoints:
    """Builders for the ``inputs`` endpoints, mixed into ``Session``."""

    def add_inputs(self, inputs: Inputs) -> Request:
        r = Request(self, "POST", "inputs")
        r.set_payload(inputs)
        return r

    def get_all_inputs(self) -> Request:
        return Request(self, "GET", "inputs")

    def get_input(self, input_id: str) -> Request:
        return Request(self, "GET", f"inputs/{input_id}")

    def get_input_statuses(self) -> Request:
        return Request(self, "GET", "inputs/status")

    def delete_input_concepts(self, input_id: str, concepts: Sequence[str]) -> Request:
        """Remove concepts that were already added to an input."""
        r = Request(self, "PATCH", "inputs")

        item = PatchInput(id=input_id)
        for concept_id in concepts:
            item.add_concept(concept_id, ignore_value=True)

        r.set_payload(PatchInputsPayload(action="remove", inputs=[item]))
        return r

    def update_input_concepts(self, input_id: str, concepts: Dict[str, bool]) -> Request:
        """Update existing and/or add new concepts to an input by its ID."""
        r = Request(self, "PATCH", "inputs")

        item = PatchInput(id=input_id)
        for concept_id, value in concepts.items():
            item.add_concept(concept_id, value)

        r.set_payload(PatchInputsPayload(action="merge", inputs=[item]))
        return r

    def delete_input(self, input_id: str) -> Request:
        return Request(self, "DELETE", f"inputs/{input_id}")

    def delete_inputs(self, ids: Sequence[str]) -> Request:
        r = Request(self, "DELETE", "inputs")
        r.set_payload({"ids": list(ids)})
        return r

    def delete_all_inputs(self) -> Request:
        return Request(self, "DELETE", "inputs")

    def predict(self, inputs: Inputs) -> Request:
        """Run the batch against the model chosen with ``Inputs.set_model``."""
        r = Request(self, "POST", f"models/{inputs.model_id}/outputs")
        r.set_payload(inputs)
        logger.debug(f"Built predict request for model {inputs.model_id} with {len(inputs)} inputs")
        return r
