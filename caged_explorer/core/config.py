"""Configuration management for CAGED Explorer."""

from typing import Dict, Any, Optional
import json
import os
from pathlib import Path

import pyfiglet

from ..clusters import BLUES_MARGIN, DEFAULT_GAP_THRESHOLD, PARTIAL_RATIO
from ..logger import get_logger
from ..scales import NUM_FRETS

logger = get_logger(__name__)

# Per-section value checks: key -> (type, predicate, description)
SETTING_CHECKS = {
    "fretboard": {
        "num_frets": (int, lambda v: 1 <= v <= 24, "between 1 and 24"),
        "gap_threshold": (int, lambda v: v >= 1, "at least 1"),
        "partial_ratio": (float, lambda v: 0 < v <= 1, "in (0, 1]"),
        "blues_margin": (int, lambda v: v >= 0, "not negative"),
    },
    "display": {
        "label": (str, lambda v: v in ("intervals", "notes"), "'intervals' or 'notes'"),
        "banner_font": (str, lambda v: v in pyfiglet.FigletFont.getFonts(), "an installed figlet font"),
    },
}


def _coerce(cast, raw):
    """Convert a raw JSON value, refusing lossy or boolean conversions."""
    if isinstance(raw, bool):
        raise ValueError("booleans are not settings values")
    if cast is int and isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"{raw} is not a whole number")
    return cast(raw)


class ConfigManager:
    """Configuration manager for CAGED Explorer."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/caged_explorer by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "caged_explorer")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Default configurations
        self.default_configs = {
            "fretboard": {
                "num_frets": NUM_FRETS,
                "gap_threshold": DEFAULT_GAP_THRESHOLD,
                "partial_ratio": PARTIAL_RATIO,
                "blues_margin": BLUES_MARGIN,
            },
            "display": {
                "label": "intervals",
                "banner_font": "standard",
            },
        }

        # Load existing configurations or create default ones
        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    config = json.load(f)
                logger.info(f"Loaded configuration from {config_file}")
            except (OSError, ValueError) as e:
                logger.error(f"Error loading configuration from {config_file}: {e}")
                return default_config.copy()

            if not isinstance(config, dict):
                logger.error(f"Ignoring {config_file}: expected a JSON object")
                return default_config.copy()

            # Ensure all default keys are present
            for key, value in default_config.items():
                config.setdefault(key, value)
            return config

        # Create default configuration
        config = default_config.copy()
        self.save_config(name, config)
        return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self.config_dir / f"{name}.json"

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get a copy of a configuration by name."""
        return self.configs.get(name, {}).copy()

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name].update(updates)
        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = self.default_configs[name].copy()
        return self.save_config(name, self.configs[name])

    def settings(self, name: str) -> Dict[str, Any]:
        """Typed values of a configuration section.

        Values that cannot be converted or fall outside their allowed range are
        replaced by the defaults and reported. Keys without a check are dropped.

        Raises:
            KeyError: If the section is unknown
        """
        defaults = self.default_configs[name]
        values = {}
        for key, (cast, valid, expected) in SETTING_CHECKS[name].items():
            raw = self.configs[name].get(key, defaults[key])
            try:
                value = _coerce(cast, raw)
            except (TypeError, ValueError):
                value = None
            if value is None or not valid(value):
                logger.error(
                    f"Invalid {name}.{key} = {raw!r} (expected {expected}); "
                    f"using {defaults[key]!r}"
                )
                value = defaults[key]
            values[key] = value
        return values
