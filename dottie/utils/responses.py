from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from dottie.schemas.base import StandardResponse


def standard_response(
    *,
    success: bool,
    message: str,
    status_code: int,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
) -> JSONResponse:
    """Wrap a payload in the standard envelope, sent with a matching HTTP status."""
    body = StandardResponse(
        success=success,
        message=message,
        data=data,
        error=error,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
