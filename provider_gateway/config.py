"""Configuration management using Pydantic Settings."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS Configuration
    aws_region: str = "eu-central-1"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None  # Required for temporary credentials

    @field_validator(
        "aws_access_key_id",
        "aws_secret_access_key",
        "aws_session_token",
        "dynamodb_endpoint_url",
        "cognito_endpoint_url",
        mode="before",
    )
    @classmethod
    def convert_empty_string_to_none(cls, v):
        """Convert empty strings to None so boto3 can use IAM role in Lambda."""
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    # Backend resources (baked into the request templates at startup)
    dynamodb_endpoint_url: str | None = None
    dynamodb_table_name: str = "rodolfo-table"
    cognito_endpoint_url: str | None = None
    cognito_user_pool_id: str = "eu-central-1_rodolfo"
    cognito_user_pool_client_id: str = "rodolfo-user-pool-client"

    # Application Configuration
    log_level: str = "INFO"
    api_title: str = "Rodolfo Provider API"
    api_version: str = "1.0.0"
    api_base_path: str = "/v1"

    # Response selection
    error_selection_pattern: str = "400"
    strict_backend_signals: bool = True

    # Request handling
    require_bearer_token: bool = True
    max_request_size_bytes: int = 512 * 1024  # 512KB


# Global settings instance
settings = Settings()
