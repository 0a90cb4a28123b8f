"""Configuration classes for the timeline scheduler."""

from enum import Enum

from pydantic import BaseModel, Field


class ResolutionMode(str, Enum):
    """How dependency constraints are propagated."""

    # Depth-first from every task in input order over one shared working set.
    # A cycle cuts off only the branch that re-enters it.
    INPUT_ORDER = "input_order"
    # Single pass in dependency order; cycle members see only already-placed prerequisites.
    TOPOLOGICAL = "topological"


class SchedulingConfig(BaseModel):
    """Tunables for one scheduling run."""

    resolution: ResolutionMode = ResolutionMode.INPUT_ORDER
    # Gap between a prerequisite's end and a dependent's start
    buffer_days: int = Field(default=1, ge=0)
    padding_days: int = Field(default=7, ge=0)  # Grid padding around scheduled tasks
    default_window_days: int = Field(default=30, ge=0)  # Window when no dates exist
