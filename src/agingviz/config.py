"""
Configuration loading for the CLI and the dashboard.

Values are layered: built-in defaults, then an optional YAML file, then
``key=value`` overrides from the command line (OmegaConf dotlist syntax).
"""

from pathlib import Path
from typing import List, Optional

from omegaconf import DictConfig, OmegaConf

from .constants import (
    CHART_HEIGHT,
    CHART_MARGIN,
    CHART_WIDTH,
    DEFAULT_CSV_PATH,
    INNER_PADDING,
    OUTER_PADDING,
    PALETTE_NAME,
    SEX_MODE,
    TRANSITION_MS,
)


def create_config() -> DictConfig:
    """Create default configuration."""
    return OmegaConf.create(
        {
            "csv_path": DEFAULT_CSV_PATH,
            "dimension": SEX_MODE,
            "output": None,
            "config": None,
            "verbose": True,
            "chart": {
                "width": CHART_WIDTH,
                "height": CHART_HEIGHT,
                "margin": dict(CHART_MARGIN),
                "outer_padding": OUTER_PADDING,
                "inner_padding": INNER_PADDING,
                "transition_ms": TRANSITION_MS,
                "palette": PALETTE_NAME,
            },
        }
    )


def load_config(
    config_path: Optional[str] = None, overrides: Optional[List[str]] = None
) -> DictConfig:
    """Merge defaults, an optional YAML file and dotlist overrides."""
    config = create_config()

    try:
        cli_config = OmegaConf.from_dotlist(overrides or [])
    except Exception as e:
        raise RuntimeError(f"Failed to parse configuration overrides: {e}") from e

    # A config file may also be named from the command line (config=path.yaml)
    config_path = config_path or cli_config.get("config")
    if config_path:
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    return OmegaConf.merge(config, cli_config)
