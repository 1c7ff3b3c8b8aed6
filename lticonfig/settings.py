"""
Tool Provider settings files.

Settings describe one Tool Provider configuration and can be kept in JSON, YAML
or TOML. They are validated with pydantic before being handed to the generator.

Example (YAML):

    name: Course Reserves
    id: course-reserves
    launch_url: https://tools.example.edu/reserves/launch
    privacy_level: NAME_ONLY
    placements:
      course_navigation:
        text: Reserves

Copyright (c) 2025 Mohammad Atashi <mohammadaliatashi@icloud.com>
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lticonfig.enums import LaunchPrivacy, PlacementOption
from lticonfig.exceptions import ConfigurationError, ErrorKind


logger = logging.getLogger(__name__)


class ToolProviderSettings(BaseModel):
    """Validated Tool Provider settings."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Tool name")
    tool_id: str = Field(..., min_length=1, alias="id", description="Globally unique tool id")
    launch_url: str = Field(..., min_length=1, description="Tool launch URL")
    description: Optional[str] = Field(None, description="Tool description")
    icon_url: Optional[str] = Field(None, description="Tool icon URL")
    privacy_level: Optional[str] = Field(None, description="LaunchPrivacy name or code")
    domain: Optional[str] = Field(None, description="Domain the tool is served from")
    placements: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="Placement option properties keyed by option"
    )

    @field_validator('privacy_level')
    @classmethod
    def validate_privacy_level(cls, v: Optional[str]) -> Optional[str]:
        if v and not LaunchPrivacy.is_member(v):
            raise ValueError(f"Invalid launch privacy setting '{v}'")
        return v

    @field_validator('placements')
    @classmethod
    def validate_placements(cls, v: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        for option in v:
            if not PlacementOption.is_member(option):
                raise ValueError(f"Invalid placement option '{option}'")
        return v


def _parse_settings(config_path: Path, content: str) -> Any:
    """Parse settings text, choosing the format from the suffix or the content."""
    suffix = config_path.suffix.lower()
    if suffix == '.json':
        return json.loads(content)
    elif suffix in ['.yml', '.yaml']:
        return yaml.safe_load(content)
    elif suffix == '.toml':
        return toml.loads(content)

    # Try to detect format from content
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass
    try:
        return toml.loads(content)
    except toml.TomlDecodeError:
        pass
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError:
        raise ValueError(f"Unsupported settings format: {config_path}")


def load_settings(config_path: Union[str, Path]) -> ToolProviderSettings:
    """
    Load and validate Tool Provider settings.

    Args:
        config_path: Path of a JSON, YAML or TOML settings file

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Settings file not found: {config_path}",
            ErrorKind.TOOL_PROVIDER,
            {"path": str(config_path)},
        )

    try:
        content = config_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Settings file could not be read: {e}")
        raise ConfigurationError(
            f"Unable to read settings file {config_path}: {e}",
            ErrorKind.TOOL_PROVIDER,
            {"path": str(config_path)},
        ) from e

    try:
        data = _parse_settings(config_path, content)
    except (ValueError, yaml.YAMLError, toml.TomlDecodeError) as e:
        logger.error(f"Settings parsing failed: {e}")
        raise ConfigurationError(
            f"Unable to parse settings file {config_path}: {e}",
            ErrorKind.TOOL_PROVIDER,
            {"path": str(config_path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file {config_path} must contain a mapping",
            ErrorKind.TOOL_PROVIDER,
            {"path": str(config_path)},
        )

    try:
        settings = ToolProviderSettings.model_validate(data)
    except ValidationError as e:
        logger.error(f"Settings validation failed with {e.error_count()} errors")
        raise ConfigurationError(
            f"Invalid settings in {config_path}: {e}",
            ErrorKind.TOOL_PROVIDER,
            {"path": str(config_path)},
        ) from e

    logger.info(f"Settings loaded from {config_path}")
    return settings
