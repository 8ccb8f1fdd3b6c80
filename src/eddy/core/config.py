# src/eddy/core/config.py
"""
Configuration schema and loading for eddy.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from eddy.core.backoff import DEFAULT_MAX_SLEEP_SECONDS, DEFAULT_MIN_SLEEP_SECONDS, DEFAULT_RATE_DIVISOR

DEFAULT_SETTINGS_FILE = Path("eddy.yaml")


class StoreSettings(BaseModel):
    """Connection to the engine's backing store."""

    model_config = {"frozen": True}

    url: str = Field(
        default="sqlite:///./data/eddy.db",
        description="SQLAlchemy connection URL, e.g. sqlite:///./data/app.db or postgresql://host/db",
    )


class BackoffSettings(BaseModel):
    """Sleep bounds between quiescence polls."""

    model_config = {"frozen": True}

    min_sleep_seconds: int = Field(default=DEFAULT_MIN_SLEEP_SECONDS, ge=0, description="Shortest wait between polls")
    max_sleep_seconds: int = Field(default=DEFAULT_MAX_SLEEP_SECONDS, gt=0, description="Longest wait between polls")
    rate_divisor: int = Field(
        default=DEFAULT_RATE_DIVISOR,
        gt=0,
        description="Notifications one worker is assumed to clear per poll interval",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "BackoffSettings":
        if self.max_sleep_seconds < self.min_sleep_seconds:
            raise ValueError(f"max_sleep_seconds ({self.max_sleep_seconds}) must be >= min_sleep_seconds ({self.min_sleep_seconds})")
        return self


class MiniSettings(BaseModel):
    """Local single-process deployment whose data lives on disk.

    Example YAML:
        mini:
          data_dir: ./data
          start_local: true
    """

    model_config = {"frozen": True}

    data_dir: Path = Field(default=Path("./data"), description="Directory holding local store files")
    start_local: bool = Field(default=False, description="Whether eddy manages the local data directory")


class EddySettings(BaseModel):
    """Top-level eddy configuration.

    Example YAML:
        application: wordcount
        worker_instances: 4
        store:
          url: sqlite:///./data/wordcount.db
        backoff:
          min_sleep_seconds: 10
          max_sleep_seconds: 300
    """

    model_config = {"frozen": True}

    application: str = Field(min_length=1, description="Name of the dataflow application")
    worker_instances: int = Field(default=1, gt=0, description="Number of engine workers processing notifications")
    client_retry_timeout_ms: int = Field(
        default=500,
        ge=0,
        description="How long a user-facing client waits on a busy store before failing",
    )
    store: StoreSettings = Field(default_factory=StoreSettings)
    backoff: BackoffSettings = Field(default_factory=BackoffSettings)
    mini: MiniSettings = Field(default_factory=MiniSettings)


def resolve_settings_path(explicit: Path | None) -> Path:
    """Settings file to load: the explicit path, else ./eddy.yaml."""
    return explicit if explicit is not None else DEFAULT_SETTINGS_FILE


def load_settings(config_path: Path) -> EddySettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (EDDY_*) - highest priority
    2. Config file (eddy.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: EDDY_STORE__URL for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated EddySettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="EDDY",
        settings_files=[str(config_path)],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # .env is handled by the CLI entry point
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return EddySettings(**raw_config)
