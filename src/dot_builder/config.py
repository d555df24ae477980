"""Configuration management for dot-builder projects."""

from __future__ import annotations

import json
from pathlib import Path

from dot_builder.models import RenderConfig

DOT_BUILDER_DIR = ".dot-builder"
CONFIG_FILE = "config.json"


def _config_path(project_root: Path) -> Path:
    return project_root / DOT_BUILDER_DIR / CONFIG_FILE


def save_config(config: RenderConfig, project_root: Path) -> Path:
    """Save render config to .dot-builder/config.json. Returns the config path."""
    config_dir = project_root / DOT_BUILDER_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = _config_path(project_root)
    data = {
        "indent": config.indent,
        "port_separator": config.port_separator,
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def load_config(project_root: Path) -> RenderConfig:
    """Load render config from .dot-builder/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    data = json.loads(path.read_text())
    defaults = RenderConfig()
    return RenderConfig(
        indent=data.get("indent", defaults.indent),
        port_separator=data.get("port_separator", defaults.port_separator),
    )


def is_initialized(project_root: Path) -> bool:
    """Check if the project has a dot-builder config."""
    return _config_path(project_root).exists()


def load_config_or_default(project_root: Path) -> RenderConfig:
    """Load the project config, falling back to the defaults."""
    if not is_initialized(project_root):
        return RenderConfig()
    return load_config(project_root)
