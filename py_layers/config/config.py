"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./py_layers.db", description="SQLAlchemy database URL"
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain, json)")

    # Generation
    debug_export_dir: str = Field(default=".", description="Directory for layers_debug.txt")
    default_chunk_radius: int = Field(default=3, description="Chunk radius for generation")
    remove_chunk_radius: int = Field(default=1, description="Chunk radius for removal")
    default_debug_radius: int = Field(default=3, description="Block radius for debug export")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
