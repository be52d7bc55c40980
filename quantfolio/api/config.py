"""
Configuration management for QuantFolio API.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # App metadata
    app_name: str = "QuantFolio"
    app_version: str = "0.1.0"
    app_description: str = "Quantum-inspired Sharpe ratio portfolio optimization"

    # Environment
    environment: str = "production"
    debug: bool = False

    # API settings
    api_prefix: str = "/api/v1"
    docs_url: Optional[str] = "/docs"
    redoc_url: Optional[str] = "/redoc"

    # CORS settings
    allowed_origins: List[str] = ["http://localhost:3000", "http://localhost:8080"]
    allowed_methods: List[str] = ["GET", "POST"]
    allowed_headers: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Optimization settings
    max_optimization_time: float = Field(
        default=30.0, gt=0, description="Max optimization time in seconds"
    )
    max_concurrent_optimizations: int = Field(
        default=5, ge=1, description="Max concurrent optimizations"
    )
    default_risk_free_rate: float = Field(
        default=0.02, description="Default risk-free rate"
    )
    default_max_iterations: int = Field(
        default=100, ge=1, description="Default gradient steps per optimization"
    )
    default_tolerance: float = Field(
        default=1e-6, gt=0, description="Default convergence tolerance"
    )

    # Performance monitoring
    slow_operation_threshold_ms: float = Field(
        default=1000.0, description="Duration above which operations are logged"
    )


# Global settings instance
settings = Settings()
