"""
Configuration read from environment variables.

This is a leaf module with no internal dependencies.
"""
import os
from pathlib import Path

__all__ = ["LOG_LEVEL", "LOG_FILE", "CACHE_SAVE_DELAY", "DATA_DIR"]

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get("BITFORKS_LOG_LEVEL", "INFO")
_log_file = os.environ.get("BITFORKS_LOG_FILE")
LOG_FILE = Path(_log_file) if _log_file else None

# =============================================================================
# Plugin cache
# =============================================================================

CACHE_SAVE_DELAY = float(os.environ.get("BITFORKS_CACHE_SAVE_DELAY", "5.0"))  # seconds
DATA_DIR = Path(os.environ.get("BITFORKS_DATA_DIR", Path.home() / ".bitforks"))
