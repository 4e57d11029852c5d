"""Application configuration for Pharma Core.

Configuration is loaded from environment variables, making the service suitable
for container-based deployments (e.g., Railway).
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Pharma Core"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "pharma_core"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"

    database_url: str | None = None

    # "database" reads the UAE registry from Postgres and falls back to the CSV
    # when the database is unreachable at startup.
    drug_registry_backend: Literal["csv", "database"] = "csv"

    uae_drugs_csv: Path = _DATA_DIR / "uae_drug_list.csv"
    icd10_codes_json: Path = _DATA_DIR / "icd10_codes.json"
    daman_formulary_json: Path = _DATA_DIR / "daman_formulary.json"

    http_user_agent: str = "PharmaCore/1.0"

    snomed_base_url: str = "http://localhost:8080"
    snomed_branch: str = "MAIN"
    snomed_timeout: float = 10.0

    @property
    def sqlalchemy_database_uri(self) -> str:
        if self.database_url:
            return self.database_url

        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
