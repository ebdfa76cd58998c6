from .paths import DEFAULT_LOG_FILE, LOG_DIR, PROJECT_ROOT, STORAGE_DIR
from .logger import configure_logging, get_logger
from .settings import Settings

__all__ = [
    "PROJECT_ROOT",
    "STORAGE_DIR",
    "LOG_DIR",
    "DEFAULT_LOG_FILE",
    "configure_logging",
    "get_logger",
    "Settings",
]
