"""Configuration persistence manager for the halftone plotter.

This module handles loading and saving of processing configuration to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from models import (
    CONFIG_FILE,
    ColorMode,
    IntensityCurve,
    PatternType,
    ProcessingConfig,
    RenderStyle,
)

logger = logging.getLogger(__name__)

# Fields stored as enum values in the JSON file
ENUM_FIELDS = {
    "pattern_type": PatternType,
    "render_style": RenderStyle,
    "color_mode": ColorMode,
    "intensity_curve": IntensityCurve,
}

NUMBER_FIELDS = (
    "dot_size",
    "spacing",
    "line_angle",
    "randomness",
    "stroke_width",
    "contrast",
)

INT_FIELDS = ("seed", "max_dimension", "workers")


def config_to_dict(config: ProcessingConfig) -> Dict[str, Any]:
    """Convert a config to JSON-serializable values."""
    data = asdict(config)
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
    return data


def config_from_dict(data: Dict[str, Any], base: Optional[ProcessingConfig] = None) -> ProcessingConfig:
    """Build a config from a dict, falling back to ``base`` for missing keys.

    Raises:
        ValueError: If an enum value or number cannot be parsed
    """
    config = base or ProcessingConfig()

    for key, enum_type in ENUM_FIELDS.items():
        if key in data:
            setattr(config, key, enum_type(data[key]))
    for key in NUMBER_FIELDS:
        if key in data:
            setattr(config, key, float(data[key]))
    for key in INT_FIELDS:
        if key in data:
            setattr(config, key, int(data[key]))

    config.use_standard_angles = bool(data.get("use_standard_angles", config.use_standard_angles))
    if "angles" in data:
        config.angles = {str(k): float(v) for k, v in dict(data["angles"]).items()}
    if "colors" in data:
        config.colors = {str(k): str(v) for k, v in dict(data["colors"]).items()}

    return config


class ConfigManager:
    """Handles loading and saving of processing configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.halftone_plotter_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> ProcessingConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            ProcessingConfig with loaded or default values
        """
        config = ProcessingConfig()

        if not self.config_path.exists():
            return config

        try:
            with open(self.config_path, "r") as f:
                data = json.load(f)
            # Update config with loaded values (fallback to defaults)
            config = config_from_dict(data, config)
            logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            config = ProcessingConfig()

        return config

    def save(self, config: ProcessingConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: ProcessingConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(config_to_dict(config), f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
