"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8788
    debug: bool = False
    log_level: str = "INFO"
    download_dir: Path = Path.home() / "Downloads" / "photovault"
    download_delay_seconds: float = 0.3
    default_mime_type: str = "application/octet-stream"
    blob_dir: Optional[Path] = None  # unset: keep blobs in memory
    upload_progress_step: int = 25
    notice_history: int = 50
    default_quota_bytes: int = 1_000_000_000_000_000  # 1000 TB

    model_config = {"env_prefix": "PHOTOVAULT_"}


settings = Settings()
