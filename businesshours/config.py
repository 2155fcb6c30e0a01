"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .adapters.holiday_calendar import HolidayCalendar, read_holiday_calendar
from .domain.exceptions import ConfigurationError
from .domain.models import BusinessWindow, CalculationOptions


class BusinessHoursConfig(BaseModel):
    """Daily business window."""
    start_hour: int = 9
    end_hour: int = 17

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 24."""
        if not 0 <= v <= 24:
            raise ValueError(f"Hour must be between 0 and 24, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "BusinessHoursConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self


class HolidaysConfig(BaseModel):
    """Where the holiday calendar comes from."""
    file: Optional[Path] = None
    dates: List[Union[date, str]] = Field(default_factory=list)
    covered_years: List[int] = Field(default_factory=list)


class ColumnsConfig(BaseModel):
    """Column names used by the batch driver."""
    start: str = "start"
    end: str = "end"
    output: str = "business_hours"

    @model_validator(mode="after")
    def validate_output_column(self) -> "ColumnsConfig":
        """The output column must not overwrite an input column."""
        if self.output in (self.start, self.end):
            raise ValueError(f"output column '{self.output}' collides with an input column")
        return self


class OptionsConfig(BaseModel):
    """Edge-case policies, see CalculationOptions."""
    clamp_to_window: bool = True
    count_non_business_end_day: bool = False


class AppConfig(BaseModel):
    """Application configuration."""
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)
    holidays: HolidaysConfig = Field(default_factory=HolidaysConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    options: OptionsConfig = Field(default_factory=OptionsConfig)
    timestamp_format: Optional[str] = None

    def build_window(self) -> BusinessWindow:
        """Get the validated business window."""
        return BusinessWindow(
            start_hour=self.business_hours.start_hour,
            end_hour=self.business_hours.end_hour,
        )

    def build_options(self) -> CalculationOptions:
        return CalculationOptions(
            clamp_to_window=self.options.clamp_to_window,
            count_non_business_end_day=self.options.count_non_business_end_day,
        )

    def load_holiday_calendar(self, base_dir: Optional[Path] = None) -> HolidayCalendar:
        """
        Load the holiday file (if any) and merge the inline dates.

        Args:
            base_dir: Directory relative holiday file paths are resolved against

        Raises:
            HolidayCalendarError: If the holiday file is missing or malformed
        """
        calendar = HolidayCalendar(covered_years=sorted(set(self.holidays.covered_years)))

        if self.holidays.file is not None:
            holiday_path = self.holidays.file
            if not holiday_path.is_absolute() and base_dir is not None:
                holiday_path = base_dir / holiday_path
            read_holiday_calendar(holiday_path, calendar)

        calendar.merge(self.holidays.dates)
        return calendar

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
            ConfigurationError: If config is invalid
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
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}:\n{exc}") from exc


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of businesshours/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
