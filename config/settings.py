"""
Configuration Management for RespiGuard Snow
Loads environment variables and provides centralized settings
"""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Settings:
    """Application settings and configuration"""

    # API Configuration
    API_TITLE = "RespiGuard Snow API"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = "Simulated respiratory health monitoring in snowy winter conditions"
    API_HOST = "0.0.0.0"
    API_PORT = 8000

    # Gemini (remote analysis). API_KEY is the legacy name.
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    REMOTE_TIMEOUT = float(os.getenv("REMOTE_TIMEOUT", "10"))

    # Simulation
    TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "2.0"))
    HISTORY_SIZE = 50
    CHART_POINTS = 20
    SIMULATION_SEED = _optional_int(os.getenv("SIMULATION_SEED"))
    AUTOSTART_SIMULATION = os.getenv("AUTOSTART_SIMULATION", "True").lower() == "true"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS Settings (for frontend)
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    @classmethod
    def has_remote_credential(cls) -> bool:
        """True when a Gemini key is configured"""
        return bool(cls.GEMINI_API_KEY)

    @classmethod
    def validate_config(cls):
        """Validate configuration and report what will fall back to local logic"""
        warnings = []

        if not cls.GEMINI_API_KEY:
            warnings.append("GEMINI_API_KEY not set - will use rule-based mock analysis")

        if cls.TICK_INTERVAL <= 0:
            warnings.append(f"TICK_INTERVAL={cls.TICK_INTERVAL} is not positive - background simulation disabled")

        if cls.REMOTE_TIMEOUT <= 0:
            warnings.append(f"REMOTE_TIMEOUT={cls.REMOTE_TIMEOUT} is not positive - remote calls will fail fast")

        return warnings


# Create singleton instance
settings = Settings()
