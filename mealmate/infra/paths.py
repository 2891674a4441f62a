from pathlib import Path

from mealmate.utilities.config import DATA_DIR as _DATA_DIR

# Centralized paths for device-local data files (single source of truth)
DATA_DIR = Path(_DATA_DIR).resolve()
SESSION_FILE = DATA_DIR / 'session.json'
SECURE_SESSION_FILE = DATA_DIR / 'secure_session.json'

__all__ = ['DATA_DIR', 'SESSION_FILE', 'SECURE_SESSION_FILE']
