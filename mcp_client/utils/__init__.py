from .responses import error_payload, error_response
from .timezones import UTC, convert_to_timezone, format_medium, resolve_timezone

__all__ = [
    "error_payload",
    "error_response",
    "UTC",
    "convert_to_timezone",
    "format_medium",
    "resolve_timezone",
]
