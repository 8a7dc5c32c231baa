import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

from bloodbank.core.errors import ConfigurationFailure

load_dotenv()


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


DB_USER = os.getenv("DB_USER", "postgres")
DB_PASS = os.getenv("DB_PASS", "")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = _get_int("DB_PORT", 5432)
DB_NAME = os.getenv("DB_NAME", "bloodDB")

DB_POOL_SIZE = _get_int("DB_POOL_SIZE", 5)
DB_MAX_OVERFLOW = _get_int("DB_MAX_OVERFLOW", 10)
DB_STATEMENT_TIMEOUT_MS = _get_int("DB_STATEMENT_TIMEOUT_MS", 5000)


def build_database_url() -> str:
    override = os.getenv("DATABASE_URL")
    if override:
        return override
    return URL.create(
        "postgresql+psycopg",
        username=DB_USER,
        password=DB_PASS or None,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
    ).render_as_string(hide_password=False)


DATABASE_URL = build_database_url()

JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = _get_int("JWT_EXPIRES_MINUTES", 60)

BCRYPT_ROUNDS = _get_int("BCRYPT_ROUNDS", 10)

HOST = os.getenv("HOST", "0.0.0.0")
LOGIN_SERVICE_PORT = _get_int("PORT", 4000)
DONOR_SERVICE_PORT = _get_int("PORT", 5000)

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), default=["*"])
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_runtime_config() -> None:
    if not JWT_SECRET.strip():
        raise ConfigurationFailure("JWT_SECRET must be set before the login service starts.")
