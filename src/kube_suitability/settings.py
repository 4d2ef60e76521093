"""Service settings loaded from the environment.

All settings use the SUITABILITY_ env prefix, e.g. SUITABILITY_DATABASE_URL.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for kube-suitability-assessment.

    Environment variable prefix: SUITABILITY_
    """

    service_name: str = "kube-suitability-assessment"
    version: str = "0.1.0"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080
    cors_allow_origins: list[str] = ["*"]

    # Database (sqlite+aiosqlite for local runs, postgresql+asyncpg in production)
    database_url: str = "sqlite+aiosqlite:///./data/suitability.db"
    database_echo: bool = False
    create_schema_on_startup: bool = True
    seed_sample_data: bool = True

    # Assessment lifecycle
    lock_completed_assessments: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(env_prefix="SUITABILITY_")
