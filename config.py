"""Configuration for the environment gating service"""
import logging
from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from environment.tags import Mode


class Config(BaseSettings):
    """Settings loaded from ENVGATE_* environment variables"""

    model_config = SettingsConfigDict(env_prefix="ENVGATE_", case_sensitive=False)

    # Runtime context supplied to the matcher
    mode: Mode = Field(default=Mode.PROD, description="Runtime mode (dev, test, prod)")
    profile: str = Field(default="", description="Active configuration profile")
    node_group: str = Field(default="", description="Node group this process belongs to")

    # Service identification
    service_name: str = Field(default="envgate", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    # Process identity resolution
    identity_timeout: float = Field(default=2.0, gt=0, description="Timeout in seconds for the shell fallback")

    # Diagnostics server
    diagnostics_host: str = Field(default="127.0.0.1", description="Diagnostics server host")
    diagnostics_port: int = Field(default=9180, ge=1, le=65535, description="Diagnostics server port")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    @field_validator('mode', mode='before')
    @classmethod
    def parse_mode(cls, v):
        return Mode.parse(v)

    @field_validator('profile', 'node_group', mode='before')
    @classmethod
    def strip_label(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('log_file')
    @classmethod
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    def get_context_attributes(self) -> dict:
        """Runtime context values as plain strings, for logging"""
        return {
            "mode": self.mode.value,
            "profile": self.profile or None,
            "node_group": self.node_group or None,
        }
