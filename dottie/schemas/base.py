from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class StandardResponse(BaseModel):
    """Standard API response format"""
    success: bool = Field(..., description="Whether the request was successful")
    message: str = Field(..., description="Human-readable message")
    data: Optional[Dict[str, Any]] = Field(None, description="Response data")
    error: Optional[str] = Field(None, description="Error message if any")
    status_code: int = Field(..., description="HTTP status code")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Operation completed successfully",
                "data": {"id": 1},
                "error": None,
                "status_code": 200
            }
        }


class ErrorResponse(BaseModel):
    """Error response format"""
    error: str = Field(..., description="Error type")
    detail: Optional[Any] = Field(None, description="Detailed error information")
    status_code: int = Field(..., description="HTTP status code")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "error": "Validation Error",
                "detail": "Invalid input data",
                "status_code": 422
            }
        }


class MessageResponse(BaseModel):
    """Bare message payload"""
    message: str = Field(..., description="Message text")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Hello World from Dottie API!"
            }
        }
