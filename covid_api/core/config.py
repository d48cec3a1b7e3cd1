from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()


DEFAULT_CORS_ORIGIN = "http://localhost:3000"


def _split_csv(value: str, default: str) -> list[str]:
    """Turn 'a,b,c' into ['a','b','c']; blank falls back to default."""
    value = (value or "").strip() or default
    if value == "*":
        return ["*"]
    return [x.strip() for x in value.split(",") if x.strip()] or [default]


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


# CORS
CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", ""), DEFAULT_CORS_ORIGIN)
CORS_METHODS = ["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH"]


# Snowflake
SNOWFLAKE = {
    "account": os.getenv("SNOWFLAKE_ACCOUNT"),
    "user": os.getenv("SNOWFLAKE_USER"),
    "password": os.getenv("SNOWFLAKE_PASSWORD"),
    "authenticator": os.getenv("SNOWFLAKE_AUTHENTICATOR"),
    "role": os.getenv("SNOWFLAKE_ROLE"),
    "warehouse": os.getenv("SNOWFLAKE_WAREHOUSE"),
    "database": os.getenv("SNOWFLAKE_DATABASE", "COVID_DB"),
    "schema": os.getenv("SNOWFLAKE_SCHEMA", "PUBLIC"),
    "host": os.getenv("SNOWFLAKE_HOST"),
    "port": os.getenv("SNOWFLAKE_PORT"),
}

# seconds to wait for the initial login before giving up
SNOWFLAKE_LOGIN_TIMEOUT = int(os.getenv("SNOWFLAKE_LOGIN_TIMEOUT", "5"))

TIMESERIES_TABLE = os.getenv("TIMESERIES_TABLE", "COVID19")


# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))
API_EXPOSE_DB_ERRORS = _flag(os.getenv("API_EXPOSE_DB_ERRORS"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
