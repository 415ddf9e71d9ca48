"""
Core configuration and settings for the Product API
Values are read from environment variables and an optional .env file
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service information
    service_name: str = "product-api"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    port: int = 8003
    host: str = "0.0.0.0"

    # Database configuration
    database_url: str = "sqlite+aiosqlite:///./products.db"
    database_echo: bool = False
    database_create_tables: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "console"
    log_to_file: bool = False
    log_to_console: bool = True
    log_file_path: str = "logs/product-api.log"

    # Tracing
    telemetry_enabled: bool = True

    # Request configuration
    correlation_id_header: str = "X-Correlation-ID"

    # JWT Authentication configuration
    jwt_secret: str = "your_jwt_secret_key"
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_issuer: Optional[str] = None
    jwks_url: Optional[str] = None

    # Claim names and the permission strings that grant each capability
    permissions_claim: str = "permissions"
    roles_claim: str = "roles"
    email_claim: str = "email"
    admin_role: str = "admin"
    create_permission: str = "create:products"
    update_permission: str = "update:products"
    delete_permission: str = "delete:products"

    # When false, data-access failure text is replaced with a generic message
    expose_store_errors: bool = True

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


# Global config instance
config = Config()
