from __future__ import annotations

from pathlib import Path

# Resolved project root (parent directory of this infra package).
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Runtime output locations.
STORAGE_DIR = PROJECT_ROOT / "storage"
LOG_DIR = STORAGE_DIR / "logs"
DEFAULT_LOG_FILE = LOG_DIR / "conquest.log"
