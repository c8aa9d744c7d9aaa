"""Configuration management for the ClassSync application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('CLASSSYNC_DATA_DIR', str(BASE_DIR / 'data'))).resolve()

# Remote sync (Supabase / PostgREST). Both empty -> sync disabled unless
# configured at runtime through /api/sync/config.
SUPABASE_URL: Final[str] = os.getenv('SUPABASE_URL', '')
SUPABASE_KEY: Final[str] = os.getenv('SUPABASE_KEY', '')
SYNC_AUTO_PUSH: Final[bool] = os.getenv('SYNC_AUTO_PUSH', 'True').lower() == 'true'
SYNC_TIMEOUT_SECONDS: Final[float] = float(os.getenv('SYNC_TIMEOUT_SECONDS', '10'))
