"""
Configuration dataclass for bugsim runs.
"""

from dataclasses import dataclass, asdict
from typing import Any, Optional


@dataclass
class Config:
    """
    Configuration for a bug infestation simulation.

    Attributes:
        grid_size: Width and height of the grid
        max_generations: Optional upper bound on generations; None runs
            until a repeated state is found
        callback_interval: Call the run callback every N generations
    """

    grid_size: int = 5
    max_generations: Optional[int] = None
    callback_interval: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size}")

        if self.max_generations is not None and self.max_generations < 1:
            raise ValueError(
                f"max_generations must be >= 1 or None, got {self.max_generations}"
            )

        if self.callback_interval < 1:
            raise ValueError(
                f"callback_interval must be >= 1, got {self.callback_interval}"
            )

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.grid_size * self.grid_size

    @property
    def state_space_size(self) -> int:
        """Number of distinct grid configurations."""
        return 2 ** self.capacity

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        return cls(**d)

    @classmethod
    def from_args(cls, args: Any) -> "Config":
        """Create config from argparse namespace."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        return cls(**config_dict)
