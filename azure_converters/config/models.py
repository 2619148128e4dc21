"""
Configuration models for the resource converters.

Provides type-safe configuration using pydantic with validation,
defaults, and schema enforcement.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import ProvisioningState


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Minimum level of emitted log events",
    )
    json_format: bool = Field(
        default=True,
        description="Render log events as JSON instead of console lines",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = ConfigDict(extra="forbid")


class ConverterConfig(BaseModel):
    """Root configuration for the resource converters."""

    strict_image_resolution: bool = Field(
        default=False,
        description=(
            "Raise when an image reference ID cannot be parsed instead of "
            "returning an empty gallery image and recording a warning"
        ),
    )
    default_instance_state: ProvisioningState = Field(
        default=ProvisioningState.CREATING,
        description="State assigned to instances that report no provisioning state",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    model_config = ConfigDict(extra="forbid")
