"""
Configuration Management for AIQ Link

Centralized configuration with environment variable support.
"""

import os
from dotenv import load_dotenv
import logging

# Load environment variables from .env file
load_dotenv()

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class Config:
    """
    Centralized configuration management for AIQ Link.

    Loads settings from environment variables and provides defaults.
    Credentials are never written to the log.
    """

    # Integration Supervisor Settings
    AIQ_BASE_URL = os.getenv("AIQ_BASE_URL", "")
    AIQ_USERNAME = os.getenv("AIQ_USERNAME", "")
    AIQ_PASSWORD = os.getenv("AIQ_PASSWORD", "")
    AIQ_ORG_NAME = os.getenv("AIQ_ORG_NAME", "")

    # Transport Settings (unset means transport default / unbounded)
    try:
        AIQ_TIMEOUT = float(os.environ["AIQ_TIMEOUT"]) if os.getenv("AIQ_TIMEOUT") else None
    except ValueError:
        logger.error("AIQ_TIMEOUT must be a number, using transport default")
        AIQ_TIMEOUT = None

    try:
        AIQ_MAX_RESPONSE_BYTES = (
            int(os.environ["AIQ_MAX_RESPONSE_BYTES"]) if os.getenv("AIQ_MAX_RESPONSE_BYTES") else None
        )
    except ValueError:
        logger.error("AIQ_MAX_RESPONSE_BYTES must be an integer, reading responses unbounded")
        AIQ_MAX_RESPONSE_BYTES = None

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls, require_credentials=True):
        """
        Validate required configuration settings.

        Args:
            require_credentials: If False, only the base URL and organization are checked

        Raises:
            ValueError: If required settings are missing or invalid
        """
        errors = []

        if not cls.AIQ_BASE_URL:
            errors.append("AIQ_BASE_URL is required")
        if not cls.AIQ_ORG_NAME:
            errors.append("AIQ_ORG_NAME is required")

        if require_credentials:
            if not cls.AIQ_USERNAME:
                errors.append("AIQ_USERNAME is required")
            if not cls.AIQ_PASSWORD:
                errors.append("AIQ_PASSWORD is required")

        # Validate numeric settings
        if cls.AIQ_TIMEOUT is not None and cls.AIQ_TIMEOUT <= 0:
            errors.append("AIQ_TIMEOUT must be positive")
        if cls.AIQ_MAX_RESPONSE_BYTES is not None and cls.AIQ_MAX_RESPONSE_BYTES <= 0:
            errors.append("AIQ_MAX_RESPONSE_BYTES must be positive")

        if errors:
            raise ValueError("Configuration errors: " + "; ".join(errors))

        logger.info("Configuration validated successfully")

    @classmethod
    def log_config(cls):
        """Log current configuration (excluding sensitive data)"""
        logger.info("=== Configuration ===")
        logger.info(f"Base URL: {cls.AIQ_BASE_URL}")
        logger.info(f"Organization: {cls.AIQ_ORG_NAME}")
        logger.info(f"Username: {cls.AIQ_USERNAME or 'N/A'}")
        logger.info(f"Timeout: {cls.AIQ_TIMEOUT if cls.AIQ_TIMEOUT is not None else 'transport default'}")
        logger.info(f"Max response bytes: {cls.AIQ_MAX_RESPONSE_BYTES or 'unbounded'}")
        logger.info("====================")
