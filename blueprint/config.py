"""Configuration loader for the Blueprint graph engine."""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

LOGGER = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_PATH_ENV_VAR = "BLUEPRINT_CONFIG_PATH"
ITERATIONS_ENV_VAR = "BLUEPRINT_LAYOUT_ITERATIONS"


class ConfigError(RuntimeError):
    """Raised when the engine settings file is missing or invalid."""


class _FrozenModel(BaseModel):
    """Base model enforcing immutability for config sections."""

    model_config = ConfigDict(frozen=True)


class PipelineConfig(_FrozenModel):
    """Release metadata reported by the API."""

    version: str = Field(..., min_length=1)


class LayoutConfig(_FrozenModel):
    """Force simulation tuning knobs."""

    repulsion_constant: float = Field(12000.0, ge=0.0)
    rest_length: float = Field(140.0, ge=0.0)
    stiffness: float = Field(0.02, ge=0.0)
    damping: float = Field(0.85, ge=0.0, le=1.0)
    center_pull: float = Field(0.02, ge=0.0)
    dt: float = Field(0.02, gt=0.0)
    iterations: int = Field(220, ge=0)


class EdgeConfig(_FrozenModel):
    """Curved edge geometry settings."""

    bend: float = 30.0
    dash_pattern: str = Field("6 6", min_length=1)


class ViewportConfig(_FrozenModel):
    """Zoom bounds and fallback viewport dimensions."""

    min_zoom: float = Field(0.4, gt=0.0)
    max_zoom: float = Field(3.0, gt=0.0)
    zoom_in_factor: float = Field(1.1, gt=1.0)
    zoom_out_factor: float = Field(0.9, gt=0.0, lt=1.0)
    default_width: float = Field(800.0, gt=0.0)
    default_height: float = Field(560.0, gt=0.0)

    @model_validator(mode="after")
    def _validate_zoom_bounds(self) -> "ViewportConfig":
        if self.min_zoom >= self.max_zoom:
            msg = "viewport.min_zoom must be lower than viewport.max_zoom"
            raise ValueError(msg)
        return self


class UIConfig(_FrozenModel):
    """Presentation values shared with clients."""

    node_radius: float = Field(24.0, gt=0.0)
    allowed_origins: List[str] = Field(default_factory=list)


class AppConfig(_FrozenModel):
    """Top-level application configuration composed from config.yaml."""

    pipeline: PipelineConfig
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    edges: EdgeConfig = Field(default_factory=EdgeConfig)
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @staticmethod
    def default_path() -> Path:
        """Location of the bundled config.yaml at the repository root."""
        return REPO_ROOT / "config.yaml"


def _resolve_config_path(path: Optional[Path]) -> Path:
    """Pick the explicit path, the environment override, or the default."""

    if path is not None:
        return path
    override = os.getenv(CONFIG_PATH_ENV_VAR)
    if override:
        candidate = Path(override).expanduser()
        if candidate.exists():
            return candidate
        LOGGER.warning("Configured config file override does not exist: %s", candidate)
    return AppConfig.default_path()


def _apply_environment_overrides(raw_content: Dict[str, Any]) -> Dict[str, Any]:
    """Let ``BLUEPRINT_LAYOUT_ITERATIONS`` replace the configured step count."""

    raw_iterations = os.getenv(ITERATIONS_ENV_VAR)
    if raw_iterations is None or not raw_iterations.strip():
        return raw_content
    try:
        iterations = int(raw_iterations.strip())
    except ValueError:
        LOGGER.warning("Ignoring non-integer %s value: %s", ITERATIONS_ENV_VAR, raw_iterations)
        return raw_content
    layout_section = raw_content.setdefault("layout", {})
    layout_section["iterations"] = iterations
    LOGGER.info("Layout iterations overridden from environment (iterations=%d)", iterations)
    return raw_content


def _read_yaml(path: Path) -> Dict[str, Any]:
    """Parse the engine settings file into a plain mapping.

    Raises:
        ConfigError: If the file is absent or does not hold a YAML mapping
            of sections.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        LOGGER.error("Blueprint settings file not found: %s", path)
        raise ConfigError(f"No blueprint settings at {path}") from exc
    except yaml.YAMLError as exc:
        LOGGER.error("Blueprint settings file %s is not valid YAML", path)
        raise ConfigError(f"Unparseable blueprint settings in {path}") from exc
    if not isinstance(data, dict):
        LOGGER.error("Blueprint settings in %s must map section names to values", path)
        raise ConfigError("Blueprint settings must be a mapping of sections")
    return data


@lru_cache(maxsize=1)
def load_config(path: Optional[Path] = None) -> AppConfig:
    """Return the layout, edge, viewport and UI settings for the engine.

    The result is cached per path; environment overrides are read once, when
    a path is first loaded.

    Args:
        path: Settings file to read instead of ``BLUEPRINT_CONFIG_PATH`` or the
            repository's ``config.yaml``.

    Raises:
        ConfigError: If the settings cannot be read or a value is out of range.
    """
    config_path = _resolve_config_path(path)
    raw_content = _apply_environment_overrides(_read_yaml(config_path))
    try:
        return AppConfig(**raw_content)
    except ValidationError as exc:
        LOGGER.error("Rejected blueprint settings from %s: %s", config_path, exc)
        raise ConfigError(f"Blueprint settings in {config_path} are out of range") from exc
