# =============================================================================
# Models Package — Pydantic V2 Schemas
# =============================================================================
# Person/Address/Point double as API schemas and stored documents; there is
# no separate ORM layer since the store keeps JSON documents.
# =============================================================================

from people_api.models.person import Address, Person, Point

__all__ = ["Address", "Person", "Point"]
