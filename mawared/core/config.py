import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class BaaSSettings(BaseModel):
    url: Optional[str] = Field(default=os.getenv("BAAS_URL"))
    anon_key: Optional[str] = Field(default=os.getenv("BAAS_ANON_KEY"))
    access_token: Optional[str] = Field(default=os.getenv("BAAS_ACCESS_TOKEN"))
    rest_path: str = "/rest/v1"

class Config(BaseModel):
    app_name: str = "Mawared HR"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./mawared.db")

    # Leave data store: "sql" uses the local database, "rest" the hosted backend
    data_store_backend: str = os.getenv("DATA_STORE_BACKEND", "sql")
    baas: BaaSSettings = BaaSSettings()

    # Administrative API
    admin_api_base_url: str = os.getenv("ADMIN_API_BASE_URL", "")
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

    # Leave calendar, comma-separated weekday names
    weekend_days: str = os.getenv("WEEKEND_DAYS", "friday,saturday")

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:8081,http://localhost:19006,"
                "http://127.0.0.1:8081,http://127.0.0.1:19006",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.data_store_backend not in ("sql", "rest"):
    raise RuntimeError(
        f"FATAL: DATA_STORE_BACKEND must be 'sql' or 'rest', got '{settings.data_store_backend}'."
    )
if settings.environment not in ("development", "testing"):
    _critical_missing = []
    if settings.data_store_backend == "rest":
        if not settings.baas.url:
            _critical_missing.append("BAAS_URL")
        if not settings.baas.anon_key:
            _critical_missing.append("BAAS_ANON_KEY")
    if _critical_missing:
        raise RuntimeError(
            f"FATAL: The following settings must be set for non-development environments: "
            f"{', '.join(_critical_missing)}. Set them as environment variables."
        )
elif settings.data_store_backend == "rest" and not settings.baas.url:
    _logger.warning("DATA_STORE_BACKEND is 'rest' but BAAS_URL is not set.")
