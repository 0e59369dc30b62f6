from .responses import ok, error, error_response, internal_error_response, service_error
from .auth import auth_required, role_required
from .validation import has_required_fields, validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    decode_token,
    issue_tokens,
    TokenError,
)

__all__ = [
    'ok',
    'error',
    'error_response',
    'internal_error_response',
    'service_error',
    'auth_required',
    'role_required',
    'create_access_token',
    'create_refresh_token',
    'decode_token',
    'issue_tokens',
    'TokenError',
    'has_required_fields',
    'validate_schema',
    'transactional',
]
