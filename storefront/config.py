# storefront/config.py
import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import Tuple

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


def normalize_api_url(url: str) -> str:
    """Strip trailing slashes and make sure the URL ends with /api"""
    trimmed = url.rstrip("/")
    return trimmed if trimmed.endswith("/api") else f"{trimmed}/api"


def asset_base_url(api_url: str) -> str:
    """Host root used for storage paths (the API URL without /api)"""
    normalized = normalize_api_url(api_url)
    return normalized[: -len("/api")]


class Config:
    """Configuration settings for the storefront client"""

    # API settings
    API_URL: str = normalize_api_url(
        os.getenv("STOREFRONT_API_URL", "http://localhost:8000/api")
    )
    ASSET_BASE_URL: str = asset_base_url(API_URL)

    # Locale settings
    DEFAULT_LOCALE: str = os.getenv("STOREFRONT_LOCALE", "en") or "en"
    SUPPORTED_LOCALES: Tuple[str, ...] = ("en", "ar", "ku", "ku_sorani", "ku_badini")

    # Other settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Paths
    LOG_DIR = BASE_DIR / "logs"


def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(exist_ok=True)
    log_file = Config.LOG_DIR / "storefront.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
