"""Configuration management using Pydantic BaseSettings.

Settings are read from environment variables (and an optional ``.env`` file)
and cover the ambient behaviour of the rule: how unresolvable field paths are
treated, logging, and CLI output limits.
"""
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

MISSING_PATH_POLICIES = ("null", "raise")


class Config(BaseSettings):
    """Main configuration class."""

    # Field-path resolution
    missing_path_policy: str = Field(
        "null", description="What an unresolvable field path yields: 'null' (absence) or 'raise'"
    )

    # Logging Configuration
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format")
    max_json_output_length: int = Field(1000, ge=100, le=10000, description="Max length of logged context")

    # CLI
    max_reported_violations: int = Field(50, ge=0, le=100000, description="Max violations printed by the CLI (0=unlimited)")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator("missing_path_policy", mode="after")
    @classmethod
    def validate_missing_path_policy(cls, v: str) -> str:
        if v.lower() not in MISSING_PATH_POLICIES:
            raise ValueError(f'missing_path_policy must be one of: {", ".join(MISSING_PATH_POLICIES)}')
        return v.lower()

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level: {v}. Valid options: {valid_levels}')
        return v.upper()

    @property
    def strict_paths(self) -> bool:
        return self.missing_path_policy == "raise"

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any issues."""
        issues = []

        if self.strict_paths:
            issues.append("MISSING_PATH_POLICY=raise turns items without the checked field into hard errors")

        if self.log_level == "DEBUG":
            issues.append("LOG_LEVEL=DEBUG logs every duplicate hit, expect verbose output on large collections")

        return issues

    def log_configuration(self) -> None:
        """Log the current configuration (sanitized)."""
        from unique_rule.utils.logger import log_info

        log_info("Configuration loaded",
                 missing_path_policy=self.missing_path_policy,
                 log_level=self.log_level,
                 max_reported_violations=self.max_reported_violations)


# Global configuration instance (lazy loading)
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global _config
    _config = Config()
    return _config
