"""Application configuration with comprehensive validation."""
from typing import Literal, List
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Heliolus Scoring Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_STRATEGY_MATRIX: int = Field(default=604800, ge=1)  # 7 days
    CACHE_RETRY_INTERVAL_SECONDS: float = Field(default=30.0, ge=0)  # back-off after a failed connect

    # Risk score blend (compliance / risk / maturity / documentation)
    W_COMPLIANCE: float = Field(default=0.30, ge=0.0, le=1.0)
    W_RISK: float = Field(default=0.40, ge=0.0, le=1.0)
    W_MATURITY: float = Field(default=0.20, ge=0.0, le=1.0)
    W_DOCUMENTATION: float = Field(default=0.10, ge=0.0, le=1.0)

    # Risk band cut points on the 0-100 overall score
    RISK_BAND_LOW_MIN: float = Field(default=80.0, ge=0, le=100)
    RISK_BAND_MEDIUM_MIN: float = Field(default=60.0, ge=0, le=100)
    RISK_BAND_HIGH_MIN: float = Field(default=40.0, ge=0, le=100)

    # Allowed drift before template weights are reported as malformed
    WEIGHT_TOLERANCE: float = Field(default=0.01, ge=0, le=0.5)

    # Vendor price fit
    PRICE_TOLERANCE: float = Field(default=1.25, ge=1.0, le=3.0)

    @model_validator(mode="after")
    def validate_blend_weights(self):
        """Validate risk blend weights sum to 1.0."""
        total = sum(self.blend_weights)
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Risk blend weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_risk_bands(self):
        """Band cut points must be strictly descending."""
        if not (self.RISK_BAND_LOW_MIN > self.RISK_BAND_MEDIUM_MIN > self.RISK_BAND_HIGH_MIN):
            raise ValueError(
                "Risk band cut points must satisfy LOW_MIN > MEDIUM_MIN > HIGH_MIN"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has safe settings."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def blend_weights(self) -> List[float]:
        """Get risk blend weights as list."""
        return [self.W_COMPLIANCE, self.W_RISK, self.W_MATURITY, self.W_DOCUMENTATION]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
