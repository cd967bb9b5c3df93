"""Response utilities."""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


def error_payload(message: str, detail: Optional[Any] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"ok": False, "error": message}
    if detail is not None:
        payload["detail"] = detail
    return payload


def error_response(message: str, *, status_code: int, detail: Optional[Any] = None) -> JSONResponse:
    """Wrap *message* in the API's ``{"ok": false, "error": ...}`` envelope."""
    return JSONResponse(error_payload(message, detail), status_code=status_code)
