"""stockroom Configuration.

Includes:
- AppConfig: Application settings with environment variable support

Environment Variables:
    STOCKROOM_API_URL: URL of the items collection on the inventory service
    STOCKROOM_TIMEOUT: Request timeout in seconds
    STOCKROOM_LOW_STOCK_THRESHOLD: Default threshold for "low stock"
    STOCKROOM_PAGE_SIZE: Rows per page in table views
    STOCKROOM_OFFLINE: Use an in-memory store instead of the service
    STOCKROOM_DEBUG: Enable DEBUG logging (read by the app entry point)
"""

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = ".stockroom"
CONFIG_FILE = "config.yaml"

# Keys persisted to the YAML file
_FILE_KEYS = ("api_url", "timeout", "low_stock_threshold", "page_size", "offline")


class AppConfig(BaseSettings):
    """Application configuration with environment variable support.

    Configuration is loaded from environment variables with STOCKROOM_ prefix.
    For example, STOCKROOM_API_URL sets api_url.

    Precedence (highest to lowest):
        1. Environment variables (STOCKROOM_*)
        2. Config file (.stockroom/config.yaml)
        3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="STOCKROOM_",
        extra="ignore",
    )

    project_path: Path = Field(default_factory=Path.cwd)
    api_url: str = "http://localhost:8000/items"
    timeout: float = Field(default=10.0, gt=0)
    low_stock_threshold: int = Field(default=5, ge=0)
    page_size: int = Field(default=5, ge=1)
    offline: bool = False

    @classmethod
    def load(cls, path: Path | None = None, **overrides: Any) -> "AppConfig":
        """Load configuration from .stockroom/config.yaml if it exists.

        Values from the file only fill in settings that no environment
        variable provides. Explicit keyword overrides win over both.

        Args:
            path: Project path to load configuration for (default: cwd)
            **overrides: Values that take precedence (e.g. from CLI flags)

        Returns:
            AppConfig with file values applied
        """
        from ruamel.yaml import YAML

        path = Path(path) if path is not None else Path.cwd()
        config = cls(project_path=path)
        config_file = path / CONFIG_DIR / CONFIG_FILE

        if config_file.exists():
            yaml = YAML(typ="safe")
            with config_file.open() as f:
                data = yaml.load(f) or {}

            from_env = config.model_fields_set
            file_values = {
                key: data[key] for key in _FILE_KEYS if key in data and key not in from_env
            }
            if file_values:
                config = cls(project_path=path, **file_values)

        set_overrides = {k: v for k, v in overrides.items() if v is not None}
        if set_overrides:
            config = config.model_copy(update=set_overrides)
        return config

    def save(self) -> Path:
        """Save configuration to .stockroom/config.yaml in the project path.

        Returns:
            Path to the written file
        """
        from ruamel.yaml import YAML

        config_dir = self.project_path / CONFIG_DIR
        config_dir.mkdir(parents=True, exist_ok=True)
        config_file = config_dir / CONFIG_FILE

        yaml = YAML()
        yaml.default_flow_style = False

        data = {key: getattr(self, key) for key in _FILE_KEYS}

        with config_file.open("w") as f:
            yaml.dump(data, f)
        return config_file


__all__ = ["AppConfig"]
