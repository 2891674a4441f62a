"""Configuration management for the Meal Mate client."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Backend Configuration
API_BASE_URL: Final[str] = os.getenv('MEALMATE_API_URL', 'http://localhost:3001').rstrip('/')
HTTP_TIMEOUT: Final[float] = float(os.getenv('MEALMATE_HTTP_TIMEOUT', '10'))

# Application Settings
LOG_LEVEL: Final[str] = os.getenv('MEALMATE_LOG_LEVEL', 'INFO').upper()
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALMATE_DATA_DIR', str(BASE_DIR / 'data')))
