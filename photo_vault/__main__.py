"""Run the gallery service: python -m photo_vault"""

import logging

import uvicorn
from .config import settings

logger = logging.getLogger("photo_vault")


def main():
    if settings.blob_dir is None:
        # the bundled registry is in-memory too, so nothing survives a restart
        logger.warning("No PHOTOVAULT_BLOB_DIR set, uploads are kept in memory only")
    uvicorn.run(
        "photo_vault.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
