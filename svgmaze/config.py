# config.py
"""
Solver configuration.

Pydantic models with defaults for every field, so an empty or partial YAML
file is valid; values present in the file override the defaults.
"""

from pathlib import Path
from typing import Literal, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator


class PlannerConfig(BaseModel):
    """A* search settings"""
    heuristic: Literal["manhattan", "signed"] = Field(
        "manhattan", description="Heuristic used to rank open-set cells"
    )


class RenderConfig(BaseModel):
    """Image styling; has no effect on the computed path"""
    background: str = Field("#dcdcdc", description="Background fill color")
    cell_edge: str = Field("#00000080", description="Outline color of blocked cells")
    path: str = Field("#ff000080", description="Fill color of path cells")
    obstacle: str = Field("#0000ff33", description="Fill color of obstacle overlays")
    marker: str = Field("green", description="Start/end marker color")
    cell_line_width: float = Field(0.1, description="Blocked cell outline width (scene units)")
    marker_line_width: float = Field(0.5, description="Marker outline width (scene units)")
    marker_radius: float = Field(2.0, description="Start/end marker radius (scene units)")
    figure_width: float = Field(8.0, description="Figure width in inches")
    dpi: int = Field(100, description="Raster output resolution")

    @field_validator("marker_radius", "figure_width")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be greater than 0: {v}")
        return v

    @field_validator("cell_line_width", "marker_line_width")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"must not be negative: {v}")
        return v

    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"dpi must be greater than 0: {v}")
        return v


class SolverConfig(BaseModel):
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def load_config(config_path: Union[str, Path]) -> SolverConfig:
    """
    Load a SolverConfig from a YAML file.

    Raises
    ------
    FileNotFoundError
        The file does not exist.
    yaml.YAMLError
        The file is not valid YAML.
    pydantic.ValidationError
        A value is out of range or has the wrong type.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        error_msg = f"Config file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {config_path}: {e}")
        raise

    if raw_config is None:
        logger.info(f"Config file {config_path} is empty, using defaults")
        return SolverConfig()

    try:
        config = SolverConfig.model_validate(raw_config)
    except ValidationError as e:
        logger.error(f"Config validation failed for {config_path}:")
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            logger.error(f"  {field_path}: {error['msg']}")
        raise

    logger.info(f"Loaded config: {config_path}")
    return config
