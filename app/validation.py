"""
Human-readable request validation messages.

FastAPI reports body problems as a list of pydantic errors. Clients of this
API get a single string instead: every error translated through
``FIELD_MESSAGES`` where a custom wording exists, joined with ``", "``.
"""

from collections.abc import Iterable, Mapping
from typing import Any

# field -> {"empty" | "min" | "max" | "invalid": message}
FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "name": {
        "empty": "Name is required",
        "min": "Name must be at least 2 characters long",
        "max": "Name cannot be more than 50 characters long",
    },
    "email": {
        "empty": "Email is required",
        "invalid": "Please provide a valid email address",
    },
    "password": {
        "empty": "Password is required",
        "min": "Password must be at least 6 characters long",
    },
    "title": {
        "empty": "Title is required",
        "min": "Title must be at least 1 character long",
        "max": "Title cannot be more than 100 characters long",
    },
    "description": {
        "max": "Description cannot be more than 500 characters long",
    },
}

_ERROR_TYPE_KEYS = {
    "string_too_short": "min",
    "string_too_long": "max",
    "value_error": "invalid",
}

_LOCATIONS = ("body", "path", "query", "header", "cookie")


def _field_name(loc: Iterable[Any]) -> str | None:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return parts[-1] if parts else None


def _strip_value_error(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def describe_error(error: Mapping[str, Any]) -> str:
    field = _field_name(error.get("loc", ()))
    error_type = error.get("type", "")
    msg = error.get("msg", "Invalid value")

    if error_type == "json_invalid":
        return "Invalid JSON in request body"

    if field is None:
        if error_type == "missing":
            return "Request body is required"
        return _strip_value_error(msg)

    if error_type == "extra_forbidden":
        return f'"{field}" is not allowed'

    messages = FIELD_MESSAGES.get(field, {})

    if error_type == "missing" or error.get("input") == "":
        return messages.get("empty", f'"{field}" is required')

    key = _ERROR_TYPE_KEYS.get(error_type)
    if key and key in messages:
        return messages[key]

    if error_type == "value_error":
        return _strip_value_error(msg)
    return f"Invalid value for '{field}': {msg}"


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Collapse pydantic errors into one comma separated message."""
    messages: list[str] = []
    for error in errors:
        message = describe_error(error)
        if message not in messages:
            messages.append(message)
    return ", ".join(messages) or "Invalid input data"
