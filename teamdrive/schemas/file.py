from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileCreate(BaseModel):
    """Schema for creating a new file (internal use with all fields)"""
    team_id: str = Field(..., description="Team that owns the file")
    folder_id: str = Field(..., description="Owning folder id")
    owner_name: str = Field(..., description="Uploader display name")
    name: str = Field(..., description="Display name including extension")
    file_path: str = Field(..., description="Object name in storage")
    key: str = Field(..., description="Generated uuid part of the object name")
    url: str = Field(..., description="Public URL of the object")
    type: str = Field(..., description="Category and extension")
    path: List[str] = Field(..., description="Ancestor folder names followed by the file name")
    size: int = Field(0, ge=0, description="File size (bytes)")
    extension: str = Field(..., description="Extension without the leading dot")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_modified_time: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "team_id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "folder_id": "65a1f0c2e4b0a1b2c3d4e5f7",
                "owner_name": "John Doe",
                "name": "Q1.pdf",
                "file_path": "0d6f4c0e-3b7e-4a57-9a51-6a8f0f1b2c3d.pdf",
                "key": "0d6f4c0e-3b7e-4a57-9a51-6a8f0f1b2c3d",
                "url": "https://storage.example.com/documents/0d6f4c0e-3b7e-4a57-9a51-6a8f0f1b2c3d.pdf",
                "type": "other/pdf",
                "path": ["root", "Reports", "Q1.pdf"],
                "size": 1024,
                "extension": "pdf"
            }
        }
    )


class FileResponse(BaseModel):
    """Schema for returning file information"""
    id: str = Field(..., description="Unique file identifier")
    owner_name: str = Field(..., description="Uploader display name")
    name: str = Field(..., description="Display name including extension")
    folder_id: str = Field(..., description="Owning folder id")
    url: str = Field(..., description="Public URL of the object")
    type: str = Field(..., description="Category and extension, e.g. other/pdf")
    path: List[str] = Field(..., description="Breadcrumb of folder names ending with the file name")
    size: int = Field(..., description="File size in bytes")
    extension: str = Field(..., description="Extension without the leading dot")
    created_at: datetime = Field(..., description="File creation timestamp")


class FileRenameRequest(BaseModel):
    """Schema for renaming a file; the extension is kept"""
    id: str = Field(..., min_length=1, description="File ID")
    name: str = Field(..., min_length=1, max_length=255, description="New name without extension")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("File name cannot be empty")
        return v.strip()


class FileRenameResponse(BaseModel):
    id: str
    name: str


class PresignedUrlResponse(BaseModel):
    url: str = Field(..., description="Time-limited download URL")
    expires_in: int = Field(..., description="Validity in seconds")
