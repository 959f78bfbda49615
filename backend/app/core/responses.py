"""Response Envelopes — the JSON shapes every endpoint returns.

Invariants:
    - Success: {success: true, message, data, timestamp}
    - Error:   {success: false, error: {message, statusCode, details?}, timestamp}
    - timestamp is UTC ISO-8601 with a trailing Z
"""

from datetime import datetime, timezone
from typing import Any


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def success_response(data: Any, message: str = "Success") -> dict:
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": utc_timestamp(),
    }


def error_envelope(
    message: str, status_code: int = 500, details: Any = None, **extra: Any,
) -> dict:
    """Build the standard error envelope; extra keys with None values are dropped."""
    error: dict[str, Any] = {"message": message, "statusCode": status_code}
    if details is not None:
        error["details"] = details
    error.update({k: v for k, v in extra.items() if v is not None})
    return {"success": False, "error": error, "timestamp": utc_timestamp()}
