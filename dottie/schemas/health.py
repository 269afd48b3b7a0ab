from typing import Optional

from pydantic import BaseModel, Field


class SimpleHealthResponse(BaseModel):
    """Simple health check response"""
    success: bool = Field(..., description="Whether the health check was successful")
    status: str = Field(..., description="Overall status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    message: Optional[str] = Field(None, description="Additional message")
    error: Optional[str] = Field(None, description="Error message if any")
    status_code: int = Field(..., description="HTTP status code")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "success": True,
                "status": "healthy",
                "service": "dottie-api",
                "version": "1.0.0",
                "message": "Service is running",
                "error": None,
                "status_code": 200
            }
        }


class DBHealthResponse(BaseModel):
    """Database health check response"""
    success: bool = Field(..., description="Whether the health check was successful")
    status: str = Field(..., description="Database status")
    message: str = Field(..., description="Status message")
    response_time_ms: float = Field(..., description="Response time in milliseconds")
    error: Optional[str] = Field(None, description="Error message if any")
    status_code: int = Field(..., description="HTTP status code")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "success": True,
                "status": "connected",
                "message": "Database is available",
                "response_time_ms": 3.1,
                "error": None,
                "status_code": 200
            }
        }
