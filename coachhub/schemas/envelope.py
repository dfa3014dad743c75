"""
CoachHub API - Result Envelope.

Every data-access function answers with an ``Envelope``: ``success`` plus
either the payload fields of that function or a localized ``error``.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    """
    Discriminated success/failure result.

    Payload fields are stored as extras so that the transport shape stays
    flat: ``{"success": true, "athletes": [...]}`` or
    ``{"success": false, "error": "No autorizado"}``.
    """

    model_config = ConfigDict(extra="allow")

    success: bool

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dictionary for the HTTP layer."""
        return self.model_dump(mode="json")


def success(**payload: Any) -> Envelope:
    """Build a success envelope carrying ``payload``."""
    return Envelope(success=True, **payload)


def failure(error: str, **details: Any) -> Envelope:
    """
    Build a failure envelope with a localized message.

    ``details`` are extra fields a caller can act on, e.g.
    ``requires_confirmation`` when a schedule write would replace entries.
    """
    return Envelope(success=False, error=error, **details)
