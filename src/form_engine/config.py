"""
Configuration module for form-engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormEngineConfig:
    """Configuration settings for form-engine."""

    # Validator settings
    validator_cache_size: int = 256

    # Session settings
    debounce_seconds: float = 0.3  # Delay before a debounced edit is validated
    strict_field_ids: bool = True  # Reject forms with duplicate field ids
    validate_on_mount: bool = False

    # Logging / tracing settings
    log_level: str = "WARNING"
    trace_file: str | None = None

    @classmethod
    def from_env(cls) -> "FormEngineConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            validator_cache_size=int(os.getenv("FORM_ENGINE_VALIDATOR_CACHE_SIZE", str(_defaults.validator_cache_size))),
            debounce_seconds=float(os.getenv("FORM_ENGINE_DEBOUNCE_SECONDS", str(_defaults.debounce_seconds))),
            strict_field_ids=os.getenv("FORM_ENGINE_STRICT_FIELD_IDS", str(_defaults.strict_field_ids).lower()).lower() == "true",
            validate_on_mount=os.getenv("FORM_ENGINE_VALIDATE_ON_MOUNT", str(_defaults.validate_on_mount).lower()).lower() == "true",
            log_level=os.getenv("FORM_ENGINE_LOG_LEVEL", _defaults.log_level).upper(),
            trace_file=os.getenv("FORM_ENGINE_TRACE_FILE") or _defaults.trace_file,
        )


config = FormEngineConfig.from_env()


def get_config() -> FormEngineConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormEngineConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
