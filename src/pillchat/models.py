"""
Defines the core Pydantic data models for the application.

These models are the contract between the ledger, the orchestrator, the parser
and the layout. Turns are stored; parsed replies are derived from a turn's text
at render time and never stored.
"""

import itertools
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Constants ---
USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
Role = Literal["user", "assistant"]

IDLE = "idle"
PENDING = "pending"
RequestState = Literal["idle", "pending"]

_turn_ids = itertools.count(1)


# --- Models ---
class Turn(BaseModel):
    """A single entry in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str = ""
    image: Optional[str] = None
    id: int = Field(default_factory=lambda: next(_turn_ids))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _assistant_has_no_image(self) -> "Turn":
        if self.role == ASSISTANT_ROLE and self.image is not None:
            raise ValueError("assistant turns cannot carry an image")
        return self


class PrescriptionItem(BaseModel):
    drug_name: str
    dosage: str


class Prescription(BaseModel):
    kind: Literal["prescription"] = "prescription"
    items: List[PrescriptionItem] = Field(default_factory=list)


class Section(BaseModel):
    title: str
    body: str = ""


class SectionedSummary(BaseModel):
    kind: Literal["sections"] = "sections"
    sections: List[Section] = Field(default_factory=list)


class RawText(BaseModel):
    kind: Literal["raw"] = "raw"
    text: str


ParsedReply = Annotated[
    Union[Prescription, SectionedSummary, RawText], Field(discriminator="kind")
]
