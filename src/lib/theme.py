"""
Theme loader for ledgerdown reports.

Themes provide CSS classes and styling for the generated report.
Each theme is a directory containing:
  - theme.yaml: Configuration (element classes, heading offset, labels)
  - theme.css: Custom CSS styles
  - assets/: Optional images, fonts, etc.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

THEMES_DIR = Path(__file__).resolve().parent.parent / "themes"


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


class Theme:
    """
    Represents a report theme.

    A theme consists of:
      - Configuration from theme.yaml
      - Custom CSS from theme.css
      - Optional assets (images, fonts)
    """

    def __init__(self, theme_name: str, themes_dir: Optional[Path] = None):
        """
        Load a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "default")
            themes_dir: Path to themes directory (default: packaged themes)

        Raises:
            ThemeError: If theme directory or theme.yaml don't exist
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else THEMES_DIR
        self.theme_dir = self.themes_dir / theme_name

        if not self.theme_dir.is_dir():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(f"Theme '{theme_name}' missing theme.yaml")

        self.config = self._config_load()

        self.css_path = self.theme_dir / "theme.css"
        self.assets_dir = self.theme_dir / "assets"

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}") from e
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}") from e
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ThemeError(f"Theme '{self.name}': theme.yaml must be a mapping")
        return config

    def css_has(self) -> bool:
        """Check if theme has custom CSS file"""
        return self.css_path.exists()

    def assets_has(self) -> bool:
        """Check if theme has assets directory"""
        return self.assets_dir.is_dir()

    def cssPath_get(self) -> Optional[Path]:
        """Get path to theme CSS file, or None if doesn't exist"""
        return self.css_path if self.css_has() else None

    def assetsDir_get(self) -> Optional[Path]:
        """Get path to theme assets directory, or None if doesn't exist"""
        return self.assets_dir if self.assets_has() else None

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation:
          theme.config_get('analysis.classes.paragraph', '')
        """
        value: Any = self.config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def class_get(self, element: str, default: str = "") -> str:
        """CSS class for an analysis element (heading1, list_ordered, bold, ...)"""
        return str(self.config_get(f'analysis.classes.{element}', default))

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[Path] = None) -> list[str]:
    """
    List all available theme names.

    Returns:
        Sorted directory names under themes_dir that contain a theme.yaml
    """
    themes_path = Path(themes_dir) if themes_dir else THEMES_DIR
    if not themes_path.exists():
        return []
    return sorted(
        item.name for item in themes_path.iterdir()
        if item.is_dir() and (item / "theme.yaml").exists()
    )


def theme_validate(theme_name: str, themes_dir: Optional[Path] = None) -> tuple[bool, str]:
    """
    Validate a theme's structure and configuration.

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        theme = Theme(theme_name, themes_dir)
    except ThemeError as e:
        return False, str(e)

    if not theme.css_has():
        return False, f"Warning: Theme '{theme_name}' has no theme.css file"
    if not theme.config:
        return False, f"Theme '{theme_name}' has empty configuration"
    return True, f"Theme '{theme_name}' is valid"
