"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional
from flask import current_app, request


USER_ID_HEADER = 'X-User-Id'


def get_user_id(request_obj=None) -> str:
    """Resolve the caller's user id from the request, defaulting to the local user."""
    if request_obj is None:
        request_obj = request

    user_id = (request_obj.headers.get(USER_ID_HEADER) or '').strip()
    return user_id or current_app.config.get('LOCAL_USER_ID', 'local')


def parse_bool(value, default: Optional[bool] = None) -> Optional[bool]:
    """Parse JSON/env style booleans ('true', '1', True)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
