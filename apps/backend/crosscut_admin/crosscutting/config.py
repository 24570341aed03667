"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults matching the local docker-compose topology of BPO/PLM/DocGen

Collaborators:
  - api/main.py: reads settings for CORS and startup logging
  - container.py: picks adapters (audit feed, product catalog, HTTP clients)
  - crosscutting/logger.py: reads log level and format

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Singleton via lru_cache
  - Service URLs are stored without trailing slash
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCT_SOURCES = frozenset({"plm", "file", "memory"})


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root log level for the service logger
        log_json: Emit JSON log lines (default: True)
        allowed_origins: Comma-separated CORS origins (admin UI)
        bpo_service_url: CrossCut BPO base URL (workflow execution + health)
        plm_service_url: PLM service base URL (products + health)
        docgen_service_url: DocGen service base URL (health only)
        audit_log_path: Path of the BPO audit log (JSON array)
        product_source: plm | file | memory
        plm_data_path: PLM data file, used when product_source=file
        http_timeout_seconds: Transport timeout for outbound HTTP calls
        default_trigger_event: Trigger event used when the create form omits it
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Upstream services
    bpo_service_url: str = "http://localhost:8080"
    plm_service_url: str = "http://localhost:8081"
    docgen_service_url: str = "http://localhost:8082"

    # Data sources
    audit_log_path: str = "/app/data/audit-log.json"
    product_source: str = "plm"
    plm_data_path: str = "/app/data/plm-data.json"

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Workflow creation
    default_trigger_event: str = "schematic.released"

    @field_validator("bpo_service_url", "plm_service_url", "docgen_service_url")
    @classmethod
    def service_url_must_be_set(cls, v: str) -> str:
        url = (v or "").strip().rstrip("/")
        if not url:
            raise ValueError("service URLs must be non-empty")
        return url

    @field_validator("product_source")
    @classmethod
    def product_source_valid(cls, v: str) -> str:
        source = (v or "plm").strip().lower()
        if source not in PRODUCT_SOURCES:
            raise ValueError("product_source must be plm, file, or memory")
        return source

    @field_validator("http_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be greater than 0")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
