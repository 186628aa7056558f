"""Configuration settings for the duplicate face check function."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Function settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        REKOGNITION_COLLECTION_ID: Rekognition face collection searched for duplicates
        REMOTE_CALL_DEADLINE_MARGIN_MS: Time reserved at the end of an invocation
            for reporting the result once the remote call is abandoned
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
        frozen=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Duplicate Face Check"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "production"

    # Rekognition Settings
    # Left empty by default so a missing collection surfaces as a ConfigurationError
    # when the query is built instead of failing at import time.
    REKOGNITION_COLLECTION_ID: str = ""
    REMOTE_CALL_DEADLINE_MARGIN_MS: int = 500

    # AWS Settings
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"


settings = Settings()
