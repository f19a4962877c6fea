from typing import Generic, List, Optional, TypeVar
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper for all endpoints"""
    success: bool = Field(True, description="Indicates if the request was successful")
    message: Optional[str] = Field(None, description="Human-readable message about the operation")
    data: Optional[T] = Field(None, description="Response data payload")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Folder created successfully",
                "data": {"id": "65a1f0c2e4b0a1b2c3d4e5f7", "name": "Reports"}
            }
        }
    )

class ErrorDetail(BaseModel):
    """Detailed error information for validation and business logic errors"""
    code: str = Field(..., description="Error code identifier")
    message: str = Field(..., description="Human-readable error message")
    field: Optional[str] = Field(None, description="Field name that caused the error (for validation errors)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "empty_file_name",
                "message": "File name can't be empty",
                "field": "file_name"
            }
        }
    )

class ApiError(BaseModel):
    """Error response wrapper for failed operations"""
    success: bool = Field(False, description="Always false for error responses")
    message: str = Field(..., description="Main error message")
    errors: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Invalid file type: .gif",
                "errors": [
                    {
                        "code": "invalid_file_type",
                        "message": "Invalid file type: .gif",
                        "field": "file"
                    }
                ],
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

class HealthCheck(BaseModel):
    """Health check response schema"""
    status: str = Field(..., description="Service status")
    database: Optional[bool] = Field(None, description="Whether MongoDB answered a ping")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
    version: Optional[str] = Field(None, description="API version")
    uptime: Optional[float] = Field(None, description="Service uptime in seconds")
