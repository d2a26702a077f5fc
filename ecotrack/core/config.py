import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_SECRET_KEY = "change-me"
DEFAULT_ADMIN_PASSWORD = "admin"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup."""

    app_env: str = "development"
    database_url: str = "sqlite:///./ecotrack.db"

    jwt_secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    admin_password: str = DEFAULT_ADMIN_PASSWORD

    guest_token_expires_minutes: int = 60
    user_token_expires_minutes: int = 15 * 24 * 60
    admin_token_expires_minutes: int = 120
    cookie_secure: bool = False

    upload_dir: str = "./uploads"

    news_api_key: str = ""
    news_api_url: str = "https://newsapi.org/v2/everything"
    news_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    @property
    def token_lifetimes(self) -> dict[str, int]:
        return {
            "guest": self.guest_token_expires_minutes,
            "user": self.user_token_expires_minutes,
            "admin": self.admin_token_expires_minutes,
        }


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        app_env=os.getenv("APP_ENV", "development"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./ecotrack.db"),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEFAULT_SECRET_KEY),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        admin_password=os.getenv("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        guest_token_expires_minutes=int(os.getenv("GUEST_TOKEN_EXPIRES_MINUTES", "60")),
        user_token_expires_minutes=int(os.getenv("USER_TOKEN_EXPIRES_MINUTES", str(15 * 24 * 60))),
        admin_token_expires_minutes=int(os.getenv("ADMIN_TOKEN_EXPIRES_MINUTES", "120")),
        cookie_secure=_get_bool(os.getenv("COOKIE_SECURE"), default=False),
        upload_dir=os.getenv("UPLOAD_DIR", "./uploads"),
        news_api_key=os.getenv("NEWS_API_KEY", ""),
        news_api_url=os.getenv("NEWS_API_URL", "https://newsapi.org/v2/everything"),
        news_timeout_seconds=float(os.getenv("NEWS_TIMEOUT_SECONDS", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() != "production":
        return
    if settings.jwt_secret_key == DEFAULT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if settings.admin_password == DEFAULT_ADMIN_PASSWORD:
        raise RuntimeError("ADMIN_PASSWORD must be set in production.")
