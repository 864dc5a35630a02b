"""Simulation settings: pydantic models filled from YAML and dot-list overrides."""

from __future__ import annotations

import os
from typing import Sequence

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
import yaml

from simpletons.evolution.engine.config import GrowthConfig, MutationConfig
from simpletons.exceptions import ValidationError


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Minimum loguru level")
    log_dir: str | None = Field(
        default=None, description="Directory for rotating log files (console only if None)"
    )
    enable_colors: bool = Field(default=True, description="Colorize console output")
    model_config = ConfigDict(extra="forbid")


class SimulationSettings(BaseModel):
    """Everything needed to seed and evolve a population."""

    population_size: int = Field(default=20, ge=0)
    seed: int | None = Field(default=None, description="Seed for growth and mutation")
    growth: GrowthConfig = Field(default_factory=GrowthConfig)
    mutation: MutationConfig = Field(default_factory=MutationConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    model_config = ConfigDict(extra="forbid")


def load_settings(
    path: str | os.PathLike | None = None,
    overrides: Sequence[str] | None = None,
) -> SimulationSettings:
    """Merge model defaults, an optional YAML file and dot-list overrides.

    Example:
        load_settings("sim.yaml", ["growth.max_depth=2", "mutation.rate=0.05"])

    Raises:
        ValidationError: the file cannot be parsed or the merged values are invalid
    """
    try:
        merged = OmegaConf.create(SimulationSettings().model_dump(mode="json"))
        # Unknown keys (typos) fail the merge instead of being dropped
        OmegaConf.set_struct(merged, True)
        if path is not None:
            merged.merge_with(OmegaConf.load(path))
        if overrides:
            merged.merge_with(OmegaConf.from_dotlist(list(overrides)))
        data = OmegaConf.to_container(merged, resolve=True)
    except (OmegaConfBaseException, yaml.YAMLError, OSError) as e:
        raise ValidationError(f"Failed to load settings: {e}") from e

    try:
        return SimulationSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid settings: {e}") from e
