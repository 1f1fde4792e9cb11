"""Newsroom exception hierarchy.

Kept dependency-free: imported by the store, the services and the API layer.
"""
from __future__ import annotations
from typing import Dict, List, Optional


class NewsroomError(Exception):
    """Base exception for all newsroom errors."""


class ValidationFailure(NewsroomError):
    """Payload or parameter rejected; carries per-field detail."""

    def __init__(self,
                 field_errors: Optional[Dict[str, List[str]]] = None,
                 form_errors: Optional[List[str]] = None) -> None:
        self.field_errors: Dict[str, List[str]] = field_errors or {}
        self.form_errors: List[str] = form_errors or []
        super().__init__(self.summary())

    def summary(self) -> str:
        parts = list(self.form_errors)
        for field, msgs in self.field_errors.items():
            parts.extend(f"{field}: {m}" for m in msgs)
        return "; ".join(parts) or "validation failed"

    def to_dict(self) -> Dict[str, object]:
        return {"formErrors": self.form_errors, "fieldErrors": self.field_errors}


class InvalidId(ValidationFailure):
    """Path identifier is not a positive integer."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(field_errors={"id": ["Invalid id"]})


class NotFound(NewsroomError):
    """Requested entity does not exist."""


class ReferentialConflict(NewsroomError):
    """Write would leave a dangling author reference or orphan news items."""


class SlugConflict(NewsroomError):
    """UNIQUE constraint on news.slug fired at write time."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"slug already taken: {slug}")


class InternalError(NewsroomError):
    """Persistence or unexpected failure; never shown verbatim to callers."""
