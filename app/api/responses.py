"""Shared JSON envelopes: {success, data | error, requestId}"""
from typing import Any, Optional

from fastapi.responses import JSONResponse


def success_response(data: Any, request_id: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={"success": True, "data": data, "requestId": request_id},
    )


def error_response(status_code: int, error: str, request_id: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "requestId": request_id},
    )
