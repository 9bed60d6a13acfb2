"""Configuration types with environment variable support.

All settings can be configured via environment variables with the PAYU_ prefix.
Example: PAYU_SECOND_KEY=abc123 sets the webhook signing key.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_config_from_file(path: str | Path) -> dict[str, Any]:
    """Load configuration from a YAML or TOML file.

    Args:
        path: Path to the configuration file (.yaml, .yml, or .toml)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file has encoding errors, invalid syntax, an unsupported
            format, or a top level that is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Config file encoding error in {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".toml":
            data = tomllib.loads(content)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")

    # Allow a top-level [payu] table so the SDK can share a file with the app.
    if isinstance(data.get("payu"), dict):
        return data["payu"]
    return data


class PayuSettings(BaseSettings):
    """SDK settings.

    Environment variables:
    - PAYU_SECOND_KEY: Webhook signing key ("second key" in the PayU panel)
    - PAYU_LOCALE: Language for validation messages (en, pl)
    - PAYU_ENVIRONMENT: production or sandbox
    - PAYU_CLIENT_ID / PAYU_CLIENT_SECRET: OAuth credentials
    - PAYU_OPEN_TIMEOUT / PAYU_READ_TIMEOUT: HTTP timeouts in seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    second_key: str | None = Field(
        default=None,
        repr=False,
        description="Shared key used to sign webhook notifications.",
    )
    locale: Literal["en", "pl"] = Field(
        default="en",
        description="Locale for validation error messages.",
    )
    environment: Literal["production", "sandbox"] = Field(
        default="production",
        description="PayU environment used when no base_url is given.",
    )
    client_id: str | None = Field(
        default=None,
        description="OAuth client id (POS id).",
    )
    client_secret: str | None = Field(
        default=None,
        repr=False,
        description="OAuth client secret.",
    )
    open_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Connect timeout in seconds.",
    )
    read_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Read timeout in seconds.",
    )
    log_level: str = Field(
        default="warning",
        description="Log level used by the CLI.",
    )

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> PayuSettings:
        """Build settings from a YAML/TOML file; explicit overrides win."""
        values = load_config_from_file(path)
        values.update(overrides)
        return cls(**values)


_config: PayuSettings | None = None


def get_config() -> PayuSettings:
    """Get the global configuration instance.

    The instance is created once from environment variables and cached.
    To reload config (e.g., in tests), call clear_config() first.
    """
    global _config
    if _config is None:
        _config = PayuSettings()
    return _config


def configure(**overrides: Any) -> PayuSettings:
    """Replace the cached configuration, keeping current values for keys not given.

    Example:
        configure(second_key="abc", locale="pl")
    """
    global _config
    current = get_config().model_dump()
    current.update(overrides)
    _config = PayuSettings(**current)
    return _config


def clear_config() -> None:
    """Clear the cached configuration.

    Call this to force reloading of environment variables on next get_config() call.
    Useful for testing.
    """
    global _config
    _config = None
