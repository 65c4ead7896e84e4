"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import InvalidFormatError
from .domain.timeutils import parse_time
from .records import ProviderRecord


class DefaultsConfig(BaseModel):
    """Defaults applied to providers that do not set their own values."""
    capacity: int = 4
    vacation_weeks: int = 5
    slot_minutes: int = 30
    display_start: str = "06:00"
    display_end: str = "22:00"

    @field_validator("capacity")
    @classmethod
    def validate_capacity(cls, value: int) -> int:
        """Ensure capacity is positive."""
        if value < 1:
            raise ValueError("capacity must be at least 1")
        return value

    @field_validator("vacation_weeks")
    @classmethod
    def validate_vacation_weeks(cls, value: int) -> int:
        """Vacation weeks must fit in a year."""
        if not 0 <= value <= 52:
            raise ValueError(f"vacation_weeks must be between 0 and 52, got {value}")
        return value

    @field_validator("slot_minutes")
    @classmethod
    def validate_slot_minutes(cls, value: int) -> int:
        """Slots must tile an hour exactly."""
        if value <= 0 or 60 % value != 0:
            raise ValueError(f"slot_minutes must divide 60, got {value}")
        return value

    @field_validator("display_start", "display_end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        """Validate HH:MM format."""
        try:
            parse_time(value)
        except InvalidFormatError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @model_validator(mode="after")
    def validate_display_order(self) -> "DefaultsConfig":
        """Ensure the displayed window opens before it closes."""
        if parse_time(self.display_end) <= parse_time(self.display_start):
            raise ValueError("display_end must be later than display_start")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    locale: str = "fr"
    providers: List[ProviderRecord] = Field(default_factory=list)

    @field_validator("providers")
    @classmethod
    def validate_providers(cls, value: List[ProviderRecord]) -> List[ProviderRecord]:
        """Ensure provider ids are unique."""
        seen_ids: set[str] = set()
        for provider in value:
            if provider.id in seen_ids:
                raise ValueError(f"Duplicate provider id detected: {provider.id}")
            seen_ids.add(provider.id)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

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
                f"Please create a carebook.yaml file. See carebook.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def find_provider(self, identifier: str) -> ProviderRecord | None:
        """Find a provider by id, or by name ignoring case."""
        for provider in self.providers:
            if provider.id == identifier:
                return provider
        for provider in self.providers:
            if provider.name.lower() == identifier.lower():
                return provider
        return None


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for carebook.yaml in current directory
    config_path = Path.cwd() / "carebook.yaml"

    if not config_path.exists():
        # Try in the project root (parent of carebook/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "carebook.yaml"

    return config_path
