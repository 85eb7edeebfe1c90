"""Upload-related models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UploadStatus(str, Enum):
    PENDING = "pending"
    READING = "reading"
    STORING = "storing"
    SAVING = "saving"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class UploadState(BaseModel):
    file_name: str
    progress_percent: int = Field(0, ge=0, le=100)
    status: UploadStatus = UploadStatus.PENDING


class UploadOutcome(BaseModel):
    file_name: str
    success: bool = False
    file_id: Optional[str] = None
    error: Optional[str] = None
