"""
Records Service - Pydantic Request/Response Schemas
====================================================

What:  The JSON contract of the /records endpoints.
How:   Request bodies are validated strictly (required fields present, string
       types, no unknown fields); responses serialize fields in declaration
       order, so a Record is always {"id", "name", "type"}.

Schemas are kept separate from the ORM model: the API exposes the id of a
created record as a decimal string, while the Record object carries an integer.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RecordPayload(BaseModel):
    """
    Body of POST /records and PUT /records/{id}.

    `id` is accepted so a client can send back a Record it previously read,
    but its value is never written: storage assigns ids on Create and Replace
    takes the id from the path.
    """
    id: Optional[int] = Field(default=None, description="Ignored")
    name: str = Field(description="Record name")
    type: str = Field(description="Record type")

    model_config = ConfigDict(extra="forbid", strict=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RecordResponse(BaseModel):
    """A persisted record as returned by GET /records and GET /records/{id}."""
    id: int = Field(description="Storage-assigned identifier")
    name: str = Field(description="Record name")
    type: str = Field(description="Record type")

    model_config = ConfigDict(from_attributes=True)


class RecordCreatedResponse(BaseModel):
    """Response of POST /records: the generated id as a decimal string."""
    id: str = Field(description="Identifier of the created record")
