"""Export option schema and validation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings, settings as default_settings

from .exceptions import ExportValidationError


MIN_QUALITY = 72
MAX_QUALITY = 600
MIN_MEMORY_LIMIT_MB = 10


class ExportFormat(str, Enum):
    """Supported paper formats"""
    A4 = "a4"
    LETTER = "letter"


class Orientation(str, Enum):
    """Page orientation"""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ExportOptions(BaseModel):
    """Options for a single PDF export. Unset fields fall back to settings."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    quality: int = Field(
        default_factory=lambda: default_settings.default_quality,
        ge=MIN_QUALITY, le=MAX_QUALITY,
    )
    format: ExportFormat = Field(default_factory=lambda: default_settings.default_format)
    orientation: Orientation = Field(default_factory=lambda: default_settings.default_orientation)
    batch_size: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("batch_size", "batchSize"),
    )
    memory_limit_mb: Optional[int] = Field(
        None, ge=MIN_MEMORY_LIMIT_MB,
        validation_alias=AliasChoices("memory_limit_mb", "memoryLimit", "memory_limit"),
    )
    compression: bool = Field(default_factory=lambda: default_settings.compression)
    file_name: str = Field(
        default_factory=lambda: default_settings.default_file_name,
        validation_alias=AliasChoices("file_name", "fileName"),
    )


# One user-facing message per violated rule
_FIELD_MESSAGES = {
    "quality": f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY} DPI",
    "format": 'Format must be either "a4" or "letter"',
    "orientation": 'Orientation must be either "portrait" or "landscape"',
    "batch_size": "Batch size must be at least 1",
    "batchSize": "Batch size must be at least 1",
    "memory_limit_mb": f"Memory limit must be at least {MIN_MEMORY_LIMIT_MB} MB",
    "memoryLimit": f"Memory limit must be at least {MIN_MEMORY_LIMIT_MB} MB",
    "memory_limit": f"Memory limit must be at least {MIN_MEMORY_LIMIT_MB} MB",
}


@dataclass
class ValidationResult:
    """Outcome of validate_options"""
    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": list(self.errors)}


OptionsInput = Union[ExportOptions, Mapping[str, Any], None]


def _error_messages(exc: PydanticValidationError) -> List[str]:
    messages: List[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ("options",)
        name = str(loc[0])
        message = _FIELD_MESSAGES.get(name, f"{name}: {error.get('msg', 'invalid value')}")
        if message not in messages:
            messages.append(message)
    return messages


def _provided_fields(options: Mapping[str, Any]) -> Dict[str, Any]:
    # None means "not specified"; defaults apply at export time
    return {key: value for key, value in dict(options).items() if value is not None}


def validate_options(options: OptionsInput) -> ValidationResult:
    """
    Check every provided option and report all violations together.

    Args:
        options: Mapping of option names (snake or camel case) or an
            already-built ExportOptions

    Returns:
        ValidationResult with one error message per violated rule
    """
    if options is None or isinstance(options, ExportOptions):
        return ValidationResult(valid=True)

    try:
        ExportOptions.model_validate(_provided_fields(options))
    except PydanticValidationError as e:
        return ValidationResult(valid=False, errors=_error_messages(e))
    return ValidationResult(valid=True)


def _settings_defaults(s: Settings) -> Dict[str, Any]:
    return {
        "quality": s.default_quality,
        "format": s.default_format,
        "orientation": s.default_orientation,
        "compression": s.compression,
        "file_name": s.default_file_name,
    }


def parse_options(options: OptionsInput, s: Optional[Settings] = None) -> ExportOptions:
    """
    Build ExportOptions or raise ExportValidationError with every message.

    Options left unset take their defaults from `s` (the global settings
    when omitted).
    """
    if isinstance(options, ExportOptions):
        return options

    try:
        provided = ExportOptions.model_validate(_provided_fields(options or {}))
        if s is None:
            return provided
        # Re-validate by field name so explicit values win over the defaults
        explicit = provided.model_dump(include=provided.model_fields_set)
        return ExportOptions.model_validate({**_settings_defaults(s), **explicit})
    except PydanticValidationError as e:
        raise ExportValidationError(_error_messages(e)) from e
