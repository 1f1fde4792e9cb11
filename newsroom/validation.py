"""
Payload and parameter validation.

validate(operation, payload) returns a trimmed, typed pydantic model or
raises ValidationFailure listing every failing field. Update operations
accept any subset of fields but need at least one.
"""
from __future__ import annotations
import re
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from newsroom.errors import InvalidId, ValidationFailure
from newsroom.models import AuthorCreate, AuthorUpdate, NewsCreate, NewsUpdate, PagingQuery

AT_LEAST_ONE = "At least one field must be provided"

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "author.create": AuthorCreate,
    "author.update": AuthorUpdate,
    "news.create": NewsCreate,
    "news.update": NewsUpdate,
}

_POSITIVE_INT = re.compile(r"^[0-9]+$")


def _failure_from(exc: ValidationError) -> ValidationFailure:
    fields: Dict[str, List[str]] = {}
    form: List[str] = []
    for err in exc.errors():
        loc = err.get("loc", ())
        msg = err.get("msg", "Invalid value")
        if loc:
            fields.setdefault(".".join(str(p) for p in loc), []).append(msg)
        else:
            form.append(msg)
    return ValidationFailure(field_errors=fields, form_errors=form)


def validate(operation: str, payload: Any) -> BaseModel:
    schema = SCHEMAS.get(operation)
    if schema is None:
        raise ValueError(f"unknown operation: {operation}")
    if not isinstance(payload, dict):
        raise ValidationFailure(form_errors=["Expected a JSON object"])
    try:
        model = schema.model_validate(payload)
    except ValidationError as e:
        raise _failure_from(e) from e
    if operation.endswith(".update") and not model.model_fields_set:
        raise ValidationFailure(form_errors=[AT_LEAST_ONE])
    return model


def parse_id(raw: Any) -> int:
    """Path ids must be plain positive integers ("0", "-1", "1.5", "abc" are rejected)."""
    s = str(raw).strip() if raw is not None else ""
    if not _POSITIVE_INT.match(s) or int(s) <= 0:
        raise InvalidId(raw)
    return int(s)


def parse_paging(limit: Optional[str] = None, offset: Optional[str] = None) -> PagingQuery:
    data = {k: v for k, v in (("limit", limit), ("offset", offset)) if v not in (None, "")}
    try:
        return PagingQuery.model_validate(data)
    except ValidationError as e:
        raise _failure_from(e) from e
