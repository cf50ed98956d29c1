"""
Configuration Module

Single source of truth for engine parameters: where the zone and asset
manifests live, how loading is validated, logging destinations and the
workshop defaults.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import yaml

from .logging_utils import LogLevel


@dataclass
class CatalogConfig:
    """
    Zone and asset manifest locations.

    Relative paths resolve against the base directory handed to
    ``get_zones_path`` / ``get_assets_path`` (or the working directory).
    """
    zones_manifest: str = "configs/zones/car.zones.yaml"
    assets_manifest: str = "configs/assets/car.assets.yaml"

    # Load-time validation
    validate_on_load: bool = True
    strict_validation: bool = True  # Raise on any validation error

    # Report asset zone keys that do not resolve in the zone catalog
    report_unresolved_keys: bool = True

    def get_zones_path(self, base_dir: Optional[Path] = None) -> Path:
        return _resolve(self.zones_manifest, base_dir)

    def get_assets_path(self, base_dir: Optional[Path] = None) -> Path:
        return _resolve(self.assets_manifest, base_dir)


@dataclass
class LoggingConfig:
    """Logger destinations."""
    log_dir: Optional[Path] = None
    console_output: bool = True
    file_output: bool = False
    console_level: str = "INFO"
    max_entries: int = 1000


@dataclass
class WorkshopConfig:
    """Defaults for the car workshop state."""
    car_color: str = "#1a1a2e"
    show_grid: bool = True
    auto_rotate: bool = True

    # Components that must be mounted to complete the game
    required_components: int = 6


@dataclass
class PlacementConfig:
    """
    Master configuration.

    Single source of truth for all parameters.
    """
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    workshop: WorkshopConfig = field(default_factory=WorkshopConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        def convert(obj):
            if isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, Path):
                return str(obj)
            elif hasattr(obj, "__dataclass_fields__"):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert(v) for v in obj]
            return obj
        return convert(self)

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> "PlacementConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "PlacementConfig":
        """Create config from dictionary."""
        logging_data = dict(data.get("logging") or {})
        if logging_data.get("log_dir"):
            logging_data["log_dir"] = Path(logging_data["log_dir"])

        return cls(
            catalog=CatalogConfig(**(data.get("catalog") or {})),
            logging=LoggingConfig(**logging_data),
            workshop=WorkshopConfig(**(data.get("workshop") or {})),
        )

    def validate(self) -> list[str]:
        """
        Validate configuration, return list of issues.

        Returns empty list if valid.
        """
        issues = []

        if not self.catalog.zones_manifest:
            issues.append("catalog.zones_manifest must not be empty")
        if not self.catalog.assets_manifest:
            issues.append("catalog.assets_manifest must not be empty")

        try:
            LogLevel.from_string(self.logging.console_level)
        except ValueError as e:
            issues.append(str(e))
        if self.logging.max_entries < 1:
            issues.append("logging.max_entries must be at least 1")
        if self.logging.file_output and not self.logging.log_dir:
            issues.append("logging.file_output requires logging.log_dir")

        if self.workshop.required_components < 1:
            issues.append("workshop.required_components must be at least 1")

        return issues


def _resolve(path_str: str, base_dir: Optional[Path]) -> Path:
    path = Path(path_str)
    if path.is_absolute():
        return path
    if base_dir:
        return Path(base_dir) / path
    return Path.cwd() / path


def create_default_config() -> PlacementConfig:
    """Create default configuration."""
    return PlacementConfig()


def load_or_create_config(config_path: Optional[Path] = None) -> PlacementConfig:
    """Load config from file or create default."""
    if config_path and Path(config_path).exists():
        return PlacementConfig.load(config_path)
    return create_default_config()
