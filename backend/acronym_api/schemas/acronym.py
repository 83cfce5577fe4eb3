"""
Acronym API: Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract with the frontend.
Why:   Automatic JSON parsing, serialization, and OpenAPI doc generation.

Design Decision:
    Body fields are Optional on purpose. A missing `acronym` must produce
    our own 400 envelope echoing the input, not FastAPI's generic 422, so
    presence rules live in AcronymService rather than in the schema.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AcronymCreate(BaseModel):
    """Body of POST /acronym. Both fields are required by the service."""

    acronym: Optional[str] = Field(default=None, description="Acronym text, e.g. 'CPU'")
    definition: Optional[str] = Field(
        default=None, description="Expansion, e.g. 'Central Processing Unit'"
    )


class AcronymUpdate(BaseModel):
    """Body of PATCH /acronym/{acronymID}. Exactly one field may be set."""

    acronym: Optional[str] = Field(default=None, description="New acronym text")
    definition: Optional[str] = Field(default=None, description="New definition text")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AcronymRecord(BaseModel):
    """
    One stored acronym/definition pair.

    `_id` is absent from fuzzy-search results (the search pipeline projects
    it away), so it is optional here.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id", description="MongoDB document id")
    acronym: str
    definition: str


class Envelope(BaseModel):
    """
    Uniform response wrapper used by every endpoint.

    Example:
        {
            "status": 409,
            "message": "Bad request: entry already exists.",
            "data": {"acronym": "CPU", "definition": "central processing unit"}
        }
    """

    status: int = Field(description="HTTP status code, repeated in the body")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    data: Any = Field(default=None, description="Result payload or echoed input")


class AcronymListEnvelope(Envelope):
    """Envelope of GET /acronym: `data` is one page of records."""

    data: List[AcronymRecord] = Field(default_factory=list, description="One page of records")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
