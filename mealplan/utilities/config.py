"""Configuration management for the meal planner."""
import os
from typing import Final
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Planner Settings
WEEK_STARTS_ON: Final[int] = int(os.getenv('WEEK_STARTS_ON', '1'))
SEED_DEFAULT_MEALS: Final[bool] = os.getenv('SEED_DEFAULT_MEALS', 'True').lower() == 'true'
