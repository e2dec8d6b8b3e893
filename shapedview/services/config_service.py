"""
Configuration service for ShapedView.

This module handles loading, saving, and managing default widget styling.
Configuration is stored as JSON in ~/.config/shapedview/config.json following
the XDG Base Directory Specification.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from shapedview.services.logging_service import get_logger

# Default configuration directory following XDG Base Directory Specification
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "shapedview"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    # Styling applied to every shaped widget unless overridden in code
    "style": {
        "border_size": 0.0,
        "border_color": "#444444",
        "border_enabled": True,
        "shadow_size": 0.0,
        "shadow_color": "#888888",
        "shadow_enabled": True,
        # One of: matrix, fit_xy, fit_start, fit_center, fit_end,
        # center, center_crop, center_inside
        "scale_type": "center_crop",
        "corner_radius": 16.0,
        "cut_size": 16.0,
        # Name registered in shapedview.core.formulas
        "formula": "SuperEllipseFormula",
        "curvature": 3.0,
    },
    "demo": {
        "shape": "round_rect",
        # Empty means a generated gradient image
        "image_path": "",
    },
}


class ConfigService:
    """
    Service for managing application configuration.

    Handles loading, saving, and accessing configuration values.
    Provides sensible defaults when config file is missing or corrupted.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize the ConfigService.

        Args:
            config_path: Optional path to config file. Defaults to
                        ~/.config/shapedview/config.json
        """
        self._logger = get_logger(__name__)
        self._config_path = config_path or DEFAULT_CONFIG_FILE
        self._config: Dict[str, Any] = {}

        self._load()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load(self) -> None:
        """Load configuration from file, using defaults if needed."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if not self._config_path.exists():
            self._logger.info(
                f"Config file not found at {self._config_path}. Using defaults."
            )
            self._save_to_file()
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)

            if isinstance(loaded_config, dict):
                self._deep_merge(self._config, loaded_config)
                self._logger.info(f"Configuration loaded from {self._config_path}")
                # Persist any default keys added since the file was written
                self._save_to_file()
            else:
                raise ValueError("Config file does not contain a valid JSON object")

        except (json.JSONDecodeError, ValueError) as e:
            self._logger.warning(
                f"Config file corrupted or invalid: {e}. Recreating with defaults."
            )
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._save_to_file()

        except (OSError, PermissionError) as e:
            self._logger.warning(
                f"Could not read config file: {e}. Using defaults."
            )

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Recursively merge override dict into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _save_to_file(self) -> None:
        """Save current configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2)

            self._logger.debug(f"Configuration saved to {self._config_path}")

        except (OSError, PermissionError) as e:
            self._logger.error(f"Could not save config file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key to retrieve.
            default: Default value if key doesn't exist.

        Returns:
            The configuration value, or default if not found.
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value (in memory only).

        Call save() to persist changes to disk.
        """
        self._config[key] = value
        self._logger.debug(f"Config key '{key}' set to '{value}'")

    def save(self) -> None:
        """Persist current configuration to disk."""
        self._save_to_file()

    # ─── Style Settings ───────────────────────────────────────────────────

    @property
    def style(self) -> Dict[str, Any]:
        """Get the default widget style section."""
        return self.get("style", DEFAULT_CONFIG["style"])

    def set_style_value(self, key: str, value: Any) -> None:
        """Set a single key of the style section (in memory only)."""
        style = dict(self.style)
        style[key] = value
        self.set("style", style)

    # ─── Demo Settings ────────────────────────────────────────────────────

    @property
    def demo_shape(self) -> str:
        """Get the shape kind the demo window starts with."""
        return self.get("demo", {}).get("shape", "round_rect")

    @property
    def demo_image_path(self) -> str:
        """Get the image shown by the demo window ('' for the generated one)."""
        return self.get("demo", {}).get("image_path", "")
