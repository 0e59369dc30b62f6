import json
from typing import Iterable

from functools import wraps
from flask import request
from pydantic import ValidationError
from .responses import validation_error_response


def has_required_fields(data: dict, required: Iterable[str]) -> bool:
    """Return True if all required fields are present in the given dict."""
    if not isinstance(data, dict):
        return False
    return all(field in data for field in required)


def validate_schema(schema):
    """Decorator to validate request JSON against a Pydantic schema."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                obj = schema(**(request.get_json(silent=True) or {}))
            except ValidationError as ve:
                return validation_error_response(json.loads(ve.json(include_url=False)))
            request.validated_data = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator
