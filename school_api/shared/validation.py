"""Input payload validation for the GraphQL layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from school_api.shared.exceptions import ValidationException

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_path(loc: tuple[int | str, ...]) -> str:
    parts = [to_camel(part) if isinstance(part, str) else str(part) for part in loc]
    return ".".join(parts) or "input"


def collect_field_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into `{field, message}` pairs with API field names."""
    return [
        {"field": _field_path(tuple(error["loc"])), "message": error["msg"]}
        for error in exc.errors()
    ]


def parse_input(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate raw input data against a schema or raise `ValidationException`."""
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        fields = collect_field_errors(exc)
        names = ", ".join(sorted({item["field"] for item in fields}))
        raise ValidationException(f"Invalid input: {names}", fields) from exc
