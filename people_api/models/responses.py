# =============================================================================
# API Response Models
# =============================================================================
# Person itself is returned as-is (see person.py); this module holds the
# envelopes that are not Person documents.
# =============================================================================

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response for GET /health — confirms the API is running."""

    status: str = "ok"
    version: str
    service: str
    store: str


class ErrorResponse(BaseModel):
    """Body returned for application errors (400 invalid query, 503 store down)."""

    detail: str
    code: str
