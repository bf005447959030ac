"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import time
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import TimeWindow


def coerce_clock_value(value):
    """YAML 1.1 reads an unquoted 10:30 as the integer 630 (10 * 60 + 30)."""
    if isinstance(value, int) and not isinstance(value, bool):
        hours, minutes = divmod(value, 60)
        return time(hour=hours, minute=minutes)
    return value


class DefaultsConfig(BaseModel):
    """Default booking window and lesson length."""
    duration_minutes: int = 60
    start_time: time = time(9, 0)
    end_time: time = time(17, 0)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_clock_value(cls, value):
        return coerce_clock_value(value)

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure lesson duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_window(self) -> "DefaultsConfig":
        """Ensure the window opens before it closes and can hold one lesson."""
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be later than start_time")
        window_minutes = (
            (self.end_time.hour * 60 + self.end_time.minute)
            - (self.start_time.hour * 60 + self.start_time.minute)
        )
        if self.duration_minutes > window_minutes:
            raise ValueError(
                f"duration_minutes ({self.duration_minutes}) is longer than the "
                f"{window_minutes} minute booking window"
            )
        return self

    def get_time_window(
        self,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        duration_minutes: Optional[int] = None,
    ) -> TimeWindow:
        """Build the domain window, applying any per-call overrides."""
        return TimeWindow(
            start_time=start_time or self.start_time,
            end_time=end_time or self.end_time,
            duration_minutes=duration_minutes or self.duration_minutes,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    roster_file: Path = Path("roster.yaml")

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``roster_file`` is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if not config.roster_file.is_absolute():
            config.roster_file = config_path.parent / config.roster_file
        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
