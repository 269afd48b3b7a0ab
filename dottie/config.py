"""
Configuration module for environment variables and application settings.
Centralized settings for database, logging, CORS, and application behavior.
"""

import os
from typing import Dict, List, Tuple
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

#---Constants---

DEFAULT_ENVIRONMENT = "production"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_VERSION = "1.0.0"
DEFAULT_ALLOWED_ORIGINS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
DEFAULT_ALLOWED_METHODS = "GET,PUT,DELETE,OPTIONS"

POSTGRES_SCHEMES = ("postgres://", "postgresql://", "postgresql+asyncpg://")


def normalize_database_url(url: str) -> Tuple[str, str]:
    """Return the async driver URL and the SSL mode extracted from it.

    Postgres URLs are rewritten to the asyncpg driver with ``sslmode`` lifted
    out of the query string. Any other URL is returned unchanged.
    """
    if not url.startswith(POSTGRES_SCHEMES):
        return url, "disable"

    parsed_url = urlparse(url)

    #---Extract query params---
    query_params: Dict[str, str] = {}
    if parsed_url.query:
        query_params = dict(
            param.split("=", 1) for param in parsed_url.query.split("&") if "=" in param
        )

    #---Handle sslmode separately---
    ssl_mode: str = query_params.pop("sslmode", "prefer")
    if parsed_url.hostname in {"localhost", "127.0.0.1"}:
        ssl_mode = "prefer"

    #---Reconstruct DB URL without sslmode---
    new_query = "&".join([f"{k}={v}" for k, v in query_params.items()])
    clean_url = parsed_url._replace(query=new_query or None).geturl()

    #---Ensure correct driver---
    if clean_url.startswith("postgres://"):
        clean_url = clean_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif clean_url.startswith("postgresql://"):
        clean_url = clean_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return clean_url, ssl_mode


def parse_csv(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


#---Database Configuration---
DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")

SQLALCHEMY_DATABASE_URL, SSL_MODE = normalize_database_url(DATABASE_URL)

#---SQLAlchemy engine settings---
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 5))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 10))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", 30))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", 1800))

#---Application Settings---

ENVIRONMENT = os.getenv("ENVIRONMENT", DEFAULT_ENVIRONMENT)
DEBUG: bool = ENVIRONMENT == "development"
LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "true").lower() in {"1", "true", "yes"}
VERSION = os.getenv("APP_VERSION", DEFAULT_VERSION)
SERVICE_NAME = "dottie-api"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))

#---Routing---
API_PREFIX = "/api"

#---CORS / Origins---
ALLOWED_ORIGINS: List[str] = parse_csv(os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS))
# Only the methods the routes serve, plus preflight
ALLOWED_METHODS: List[str] = parse_csv(os.getenv("ALLOWED_METHODS", DEFAULT_ALLOWED_METHODS))
