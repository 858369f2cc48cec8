"""
Configuration management for swarmopt.
"""

import math
import os
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import InvalidConfiguration
from .types import OptimizationDirection


logger = logging.getLogger(__name__)


@dataclass
class SwarmConfig:
    """Main configuration for a particle swarm run."""

    particle_count: int = 30
    iteration_count: int = 100
    direction: str = "minimize"

    # Learning factors: c1 pulls toward the personal best, c2 toward the global best
    local_weight: float = 2.0
    global_weight: float = 2.0

    seed: Optional[int] = None
    log_level: str = field(default_factory=lambda: os.getenv("SWARMOPT_LOG_LEVEL", "INFO"))

    # Settings for the CLI's benchmark objective (function, dimensions, bounds, integer)
    objective_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        for name in ("particle_count", "iteration_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidConfiguration(
                    f"{name} must be a positive integer, got {value!r}",
                    details={name: value}
                )

        for name in ("local_weight", "global_weight"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise InvalidConfiguration(
                    f"{name} must be a non-negative finite number, got {value!r}",
                    details={name: value}
                )

        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidConfiguration(f"seed must be an integer, got {self.seed!r}")

        if not isinstance(self.log_level, str) or not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidConfiguration(f"Unknown log level: {self.log_level!r}")

        self.direction = OptimizationDirection.from_value(self.direction).value

    @property
    def optimization_direction(self) -> OptimizationDirection:
        return OptimizationDirection.from_value(self.direction)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SwarmConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls()

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfiguration(f"Malformed config file {config_path}: {e}") from e

        if not config_data:
            logger.warning("Empty config file, using defaults")
            return cls()

        if not isinstance(config_data, dict):
            raise InvalidConfiguration(f"Config file {config_path} must contain a mapping")

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "SwarmConfig":
        """Build a configuration from a plain mapping."""
        config_data = dict(config_data)
        objective_options = config_data.pop("objective", None) or {}
        objective_options = config_data.pop("objective_options", objective_options)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_data) - known)
        if unknown:
            raise InvalidConfiguration(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={"unknown": unknown}
            )

        if not isinstance(objective_options, dict):
            raise InvalidConfiguration("objective section must be a mapping")

        return cls(objective_options=dict(objective_options), **config_data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path]):
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()
        data["objective"] = data.pop("objective_options")
        if not data["objective"]:
            del data["objective"]

        with open(config_path, 'w') as f:
            yaml.safe_dump(data, f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to {config_path}")

    def update_from_env(self):
        """Update configuration from environment variables."""
        env_mappings = {
            "SWARMOPT_PARTICLES": ("particle_count", int),
            "SWARMOPT_ITERATIONS": ("iteration_count", int),
            "SWARMOPT_DIRECTION": ("direction", str),
            "SWARMOPT_C1": ("local_weight", float),
            "SWARMOPT_C2": ("global_weight", float),
            "SWARMOPT_SEED": ("seed", int),
        }

        for env_var, (attr_name, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                setattr(self, attr_name, converter(value))
            except ValueError as e:
                raise InvalidConfiguration(
                    f"Invalid value for {env_var}: {value!r}",
                    details={"variable": env_var}
                ) from e
            logger.info(f"Updated {attr_name} from environment variable {env_var}")

        self._validate()


def load_config(config_path: Optional[Union[str, Path]] = None) -> SwarmConfig:
    """
    Load configuration from file or environment.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Loaded configuration object
    """
    if config_path:
        config = SwarmConfig.from_file(config_path)
    else:
        possible_paths = [
            "swarmopt.yaml",
            "config/swarmopt.yaml",
            os.path.expanduser("~/.swarmopt/config.yaml"),
        ]

        config = None
        for path in possible_paths:
            if os.path.exists(path):
                config = SwarmConfig.from_file(path)
                break

        if config is None:
            config = SwarmConfig()

    config.update_from_env()

    return config
