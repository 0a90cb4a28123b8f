"""Configuration file loading (ganttline_config.yaml)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .navigation import ViewMode
from .scheduler import SchedulingConfig

CONFIG_FILENAME = "ganttline_config.yaml"


class GanttConfig(BaseModel):
    """Configuration for chart output."""

    title: str = "Project Timeline"
    view_mode: ViewMode = ViewMode.MONTH
    group_by_level: bool = False  # Emit one Mermaid section per dependency level
    show_connectors: bool = True  # Include dependency connectors in table output


class UnifiedConfig(BaseModel):
    """All configuration sections of a ganttline_config.yaml file."""

    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)
    gantt: GanttConfig = Field(default_factory=GanttConfig)


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to ganttline_config.yaml

    Returns:
        UnifiedConfig with defaults for any missing section

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: dict[str, Any] | None = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")

    # pydantic's ValidationError is a ValueError
    scheduler_config = SchedulingConfig()
    if "scheduler" in data:
        scheduler_config = SchedulingConfig.model_validate(data["scheduler"])

    gantt_config = GanttConfig()
    if "gantt" in data:
        gantt_config = GanttConfig.model_validate(data["gantt"])

    return UnifiedConfig(scheduler=scheduler_config, gantt=gantt_config)


def discover_config(project_path: Path | str, config_path: Path | None = None) -> Path | None:
    """Find the config file to use for a project file.

    Search order:
    1. Explicit config_path argument
    2. Project file directory / ganttline_config.yaml
    3. Current directory / ganttline_config.yaml
    """
    if config_path is not None:
        return config_path

    project_dir_config = Path(project_path).parent / CONFIG_FILENAME
    if project_dir_config.exists():
        return project_dir_config

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return cwd_config

    return None
