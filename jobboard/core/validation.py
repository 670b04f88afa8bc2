"""
Payload validation.

Schemas are pydantic models; this module turns pydantic's error report into
a flat list of (field, message) pairs so every caller, the REST layer and
the HTTP client alike, sees the same structure.
"""

from typing import Any, Iterable, List, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from jobboard.core.errors import PayloadValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# FastAPI prefixes locations with where the value came from
_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


class FieldError(BaseModel):
    field: str
    message: str


def _field_path(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_SOURCES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts) or "__root__"


def _message(error: Mapping[str, Any]) -> str:
    # Raw text of ValueErrors raised from our own validators,
    # without pydantic's "Value error, " prefix
    if error.get("type") == "value_error":
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
    return error["msg"]


def field_errors_from(errors: Iterable[Mapping[str, Any]]) -> List[FieldError]:
    """Convert pydantic/FastAPI error dicts into FieldErrors."""
    return [FieldError(field=_field_path(e["loc"]), message=_message(e)) for e in errors]


def collect_errors(schema: Type[BaseModel], payload: Any) -> List[FieldError]:
    """Return every violation in `payload`; an empty list means it is valid."""
    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        return field_errors_from(exc.errors())
    return []


def validate_payload(schema: Type[ModelT], payload: Any) -> ModelT:
    """
    Parse `payload` with `schema`.

    Raises:
        PayloadValidationError carrying one FieldError per violation.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(field_errors_from(exc.errors())) from exc
