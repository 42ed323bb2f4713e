# =============================================
# File: hummbl_api/utils/logging.py
# Purpose: Loguru sink configuration
# =============================================

from loguru import logger

from hummbl_api.config import log_file, log_level

_configured = False


def configure_logging() -> None:
    """Add the rotating file sink once per process."""
    global _configured
    if _configured:
        return
    logger.add(log_file(), rotation="10 MB", level=log_level())
    _configured = True
