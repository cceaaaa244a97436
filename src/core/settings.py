"""Application settings."""
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )
    """Application settings."""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Project
    PROJECT_NAME: str = "openai-flow-operation"
    VERSION: str = "1.1.0"

    # Host
    HOST: str = "0.0.0.0"
    PORT: int = 8900

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """Validate CORS origins."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Service authentication
    ENABLE_SERVICE_AUTH: bool = False
    SERVICE_API_KEY: str = ""

    # OpenAI Settings
    OPENAI_API_KEY: str = ""  # Used when the option bag carries no api_key
    OPENAI_BASE_URL: Optional[str] = None
    DEFAULT_MODEL: str = "gpt-4o-mini"
    DEFAULT_MAX_OUTPUT_TOKENS: int = 1000

    # Host asset storage (legacy audio operations)
    ASSET_STORAGE_URL: str = ""
    ASSET_STORAGE_TOKEN: str = ""
    ASSET_STORAGE_TIMEOUT: int = 30  # seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # Available formats: json, text, structured
    LOG_EXTRA_FIELDS: list[str] = []  # Additional fields for logs


settings = Settings()
