"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENTS: tuple[str, ...] = ("dev1", "uat1", "staging", "prod1")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    ``APIGEE_BUILDER_*`` environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="APIGEE_BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environments
    environments: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENVIRONMENTS),
        description="Ordered list of supported Apigee environment identifiers.",
    )

    # KVM naming
    kvm_reference_scope: str = Field(
        default="private",
        description="Flow-variable scope used when referencing KVM values in URLs.",
    )
    backend_info_prefix: str = Field(
        default="backend_info",
        description="Prefix of generated KVM variable names (backend_info_1, ...).",
    )
    backend_info_kvm_suffix: str = Field(
        default="backend-info",
        description="Suffix of the KVM holding generated backend variables.",
    )
    encrypt_backend_info_kvm: bool = Field(
        default=True,
        description="Whether the generated backend-info KVM is encrypted.",
    )

    # URL parsing
    default_protocol: str = Field(
        default="https",
        description="Protocol assumed when a server URL has no scheme.",
    )

    # Strategy Selection
    variabilizer_type: str = Field(
        default="default",
        description="URL variabilizer strategy to use: 'default'.",
    )
    server_extractor_type: str = Field(
        default="openapi",
        description="Server extractor strategy to use: 'openapi'.",
    )

    # HTTP server
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn.")
    api_port: int = Field(default=8000, description="Bind port for uvicorn.")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("environments")
    @classmethod
    def ensure_environments(cls, v: list[str]) -> list[str]:
        """Strip blanks and reject an empty environment list."""
        cleaned = [env.strip() for env in v if env and env.strip()]
        if not cleaned:
            raise ValueError("At least one environment must be configured")
        return cleaned

    @field_validator("default_protocol")
    @classmethod
    def normalize_protocol(cls, v: str) -> str:
        """Normalize protocol to lowercase without separator."""
        return v.lower().removesuffix("://")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def kvm_reference(self, kvm_index: int) -> str:
        """Return the URL placeholder referencing backend variable ``kvm_index``."""
        return f"{{{self.kvm_reference_scope}.{self.variable_name(kvm_index)}}}"

    def variable_name(self, kvm_index: int) -> str:
        """Return the KVM entry name for ``kvm_index``."""
        return f"{self.backend_info_prefix}_{kvm_index}"

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
