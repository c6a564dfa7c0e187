"""
Run Context

Bundles the seeded random stream, the run configuration and the logger so
every operator receives them explicitly instead of reaching for module-level
state. Two contexts built from the same config draw identical sequences.
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from ga_config import GAConfig
from ga_logging import GALogger, get_logger


@dataclass
class GAContext:
    """Explicit per-run state threaded through every GA component."""
    config: GAConfig
    rng: random.Random = None
    logger: Optional[GALogger] = field(default=None, repr=False)

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        if self.logger is None:
            self.logger = get_logger()

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    @classmethod
    def from_config(cls, config: GAConfig, logger: GALogger = None) -> 'GAContext':
        """Create a fresh context whose random stream starts at config.seed."""
        return cls(config=config, rng=random.Random(config.seed), logger=logger)
