"""Configuration settings for MRONJ Screening."""

import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Language Settings - "zh-TW" (canonical intake-form wording) or "en"
OUTPUT_LANGUAGE: str = os.getenv("OUTPUT_LANGUAGE", "zh-TW")
SUPPORTED_LANGUAGES = ("zh-TW", "en")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# API Settings
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# File Paths
SAMPLE_INTAKES_DIR: str = os.getenv("SAMPLE_INTAKES_DIR", "data/sample_intakes")


# Validation
def validate_config() -> None:
    """Validate that all configuration values are usable."""
    if OUTPUT_LANGUAGE not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"OUTPUT_LANGUAGE must be one of {', '.join(SUPPORTED_LANGUAGES)}, got '{OUTPUT_LANGUAGE}'"
        )

    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"LOG_LEVEL '{LOG_LEVEL}' is not a valid logging level")

    if not 0 < API_PORT < 65536:
        raise ValueError(f"API_PORT must be between 1 and 65535, got {API_PORT}")


# Call validation on import
validate_config()
