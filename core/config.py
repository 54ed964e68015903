"""
Application settings loaded from environment variables (prefix LIGHTLOAD_)
or a local .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults used when a project has no explicit power configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LIGHTLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Network
    default_voltage: float = Field(default=220.0)

    # Mainpower
    default_phase_max_amps: float = Field(default=63.0)
    default_total_ports: int = Field(default=12)
    default_port_breaker_amps: float = Field(default=32.0)

    # Load status
    breaker_warning_percent: float = Field(default=80.0)

    # Generator
    generator_power_kva: float = Field(default=180.0)
    generator_voltage: float = Field(default=220.0)
    generator_three_phase: bool = Field(default=True)

    log_level: str = Field(default="INFO")

    @field_validator("default_voltage", "default_phase_max_amps",
                     "default_port_breaker_amps", "generator_power_kva", "generator_voltage")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be greater than 0 (got {v})")
        return v

    @field_validator("default_total_ports")
    @classmethod
    def ports_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be at least 1 (got {v})")
        return v

    @field_validator("breaker_warning_percent")
    @classmethod
    def warning_within_breaker(cls, v: float) -> float:
        if not 0 < v <= 100:
            raise ValueError(f"must be within (0, 100] (got {v})")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
