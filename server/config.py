# server/config.py

import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "dev-secret"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, read once from the environment (or a .env file).
    """
    JWT_SECRET: str = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    TOKEN_TTL_SECONDS: int = int(os.getenv("TOKEN_TTL_SECONDS", str(60 * 60 * 24 * 7)))

    PORT: int = int(os.getenv("PORT", "5000"))
    CLIENT_URL: str = os.getenv("CLIENT_URL", "http://localhost:5174")

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./symptoms.db")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    if settings.JWT_SECRET == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set, falling back to the development secret")
    return settings


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
