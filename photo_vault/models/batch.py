"""Batch action models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class BatchAction(str, Enum):
    DOWNLOAD = "download"
    SHARE = "share"
    COPY_NAMES = "copy_names"
    DELETE = "delete"


class BatchOutcome(BaseModel):
    action: BatchAction
    attempted: int = 0
    succeeded: list[str] = Field(default_factory=list)  # file ids
    failed: list[str] = Field(default_factory=list)  # file ids
    saved_paths: list[str] = Field(default_factory=list)  # downloads only
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and not self.failed
