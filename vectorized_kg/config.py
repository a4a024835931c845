from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Embedding Configuration
    embedding_provider: str = "hash"
    embedding_dim: int = Field(default=768, ge=0)

    # Graph Build Configuration (only embedding_dim is consumed by the build)
    k_neighbors: int = 30
    trust_num: int = 5
    negative_multiplier: int = 7
    connect_threshold: float = 0.2

    # Storage Configuration
    graph_storage_path: str = "graph_data.json"

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/app.log"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def log_dir(self) -> Optional[Path]:
        """Get log directory path."""
        if not self.log_file:
            return None
        return Path(self.log_file).parent

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
