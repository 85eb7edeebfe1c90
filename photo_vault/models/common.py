"""Core shared models."""

from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field


class FileRecord(BaseModel):
    id: str
    name: str
    size: int = Field(0, ge=0)
    mime_type: str = ""
    uploaded_at: int = 0  # nanoseconds since epoch


class UserProfile(BaseModel):
    name: str


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notice(BaseModel):
    level: NoticeLevel
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
