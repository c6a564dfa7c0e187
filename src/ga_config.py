"""
Configuration Management for Genetic Algorithm

Validates and organizes user-provided parameters into a clean structure.
Replaces the long positional constructor and the boolean strategy flags
with a single config object.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from ga_constants import GAConstants, penalty_for_policy, seconds_to_minutes
from ga_exceptions import ConfigurationError
from ga_types import (
    CrossoverStrategy, RepairPolicy, ReplacementStrategy, SelectionStrategy
)


@dataclass
class GAConfig:
    """
    Configuration container that validates and organizes run parameters.

    Strategy fields accept either the enum member or its string value
    ("sus", "uniform", "steady-state", "forced-mutation", ...).
    """

    # Core GA Parameters
    population_size: int
    generations: int
    mutation_rate: float

    # Strategy switches
    selection_strategy: SelectionStrategy = SelectionStrategy.TOURNAMENT
    crossover_strategy: CrossoverStrategy = CrossoverStrategy.TWO_POINT
    replacement_strategy: ReplacementStrategy = ReplacementStrategy.ELITIST
    repair_policy: RepairPolicy = RepairPolicy.NONE

    # Reproducibility and limits
    seed: int = GAConstants.DEFAULT_SEED
    infeasible_fitness: float = GAConstants.DEFAULT_INFEASIBLE_FITNESS
    max_time_seconds: float = GAConstants.DEFAULT_MAX_TIME_SECONDS
    max_repair_passes: int = GAConstants.DEFAULT_MAX_REPAIR_PASSES
    strict_repair: bool = False

    # Output
    verbose: bool = True
    output_dir: str = "ga_results"
    show_progress: bool = False

    def __post_init__(self):
        """Coerce strategy names and validate parameters."""
        self._coerce_strategies()
        self._validate()

    def _coerce_strategies(self):
        errors = []
        for name, enum_type in (('selection_strategy', SelectionStrategy),
                                ('crossover_strategy', CrossoverStrategy),
                                ('replacement_strategy', ReplacementStrategy),
                                ('repair_policy', RepairPolicy)):
            value = getattr(self, name)
            try:
                setattr(self, name, enum_type(value))
            except ValueError:
                choices = [member.value for member in enum_type]
                errors.append(f"{name} ({value!r}) must be one of: {choices}")
        if errors:
            raise ConfigurationError("Configuration validation failed:\n" +
                                     "\n".join(f"  - {error}" for error in errors))

    def _validate(self):
        """Validate critical parameters to catch errors early."""
        errors = []

        if self.population_size < GAConstants.MIN_POPULATION_SIZE:
            errors.append(f"Population size ({self.population_size}) must be at least "
                          f"{GAConstants.MIN_POPULATION_SIZE}")
        if self.population_size % 2 != 0:
            errors.append(f"Population size ({self.population_size}) must be even for crossover")
        if self.generations < 0:
            errors.append(f"Generations ({self.generations}) must not be negative")

        if not 0.0 <= self.mutation_rate <= 1.0:
            errors.append(f"Mutation rate ({self.mutation_rate}) must be between 0.0 and 1.0")

        if self.max_time_seconds <= 0:
            errors.append(f"Time budget ({self.max_time_seconds}s) must be positive")
        if self.max_repair_passes < 1:
            errors.append(f"Max repair passes ({self.max_repair_passes}) must be positive")

        if not self.output_dir or not self.output_dir.strip():
            errors.append("Output directory cannot be empty")

        if errors:
            raise ConfigurationError("Configuration validation failed:\n" +
                                     "\n".join(f"  - {error}" for error in errors))

    @classmethod
    def from_args(cls, args) -> 'GAConfig':
        """
        Create configuration from parsed CLI arguments.

        Args:
            args: argparse.Namespace from CLI parsing

        Returns:
            Validated GAConfig instance
        """
        config_params = {
            'population_size': args.population_size,
            'generations': args.generations,
            'mutation_rate': args.mutation_rate,
            'selection_strategy': args.selection,
            'crossover_strategy': args.crossover,
            'replacement_strategy': args.replacement,
            'repair_policy': args.repair,
            'seed': args.seed,
            'infeasible_fitness': penalty_for_policy(args.penalty),
            'max_time_seconds': args.max_time,
            'max_repair_passes': getattr(args, 'max_repair_passes', GAConstants.DEFAULT_MAX_REPAIR_PASSES),
            'strict_repair': getattr(args, 'strict_repair', False),
            'verbose': not getattr(args, 'quiet', False),
            'output_dir': args.output_dir,
            'show_progress': getattr(args, 'progress', False),
        }

        return cls(**config_params)

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        return f"""GA Configuration:
  Population: {self.population_size}
  Generations: {self.generations}
  Mutation rate: {self.mutation_rate:.4f}
  Strategies: selection={self.selection_strategy.value}, crossover={self.crossover_strategy.value}, replacement={self.replacement_strategy.value}
  Repair: {self.repair_policy.value} (max passes: {self.max_repair_passes}, strict: {self.strict_repair})
  Infeasible fitness: {self.infeasible_fitness}
  Time budget: {seconds_to_minutes(self.max_time_seconds):.1f} min
  Seed: {self.seed}
  Output: {self.output_dir}"""

    def __str__(self) -> str:
        return (f"GAConfig(pop={self.population_size}, gen={self.generations}, "
                f"mut={self.mutation_rate}, seed={self.seed})")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization (strategies as strings)."""
        config_dict = asdict(self)
        for name in ('selection_strategy', 'crossover_strategy',
                     'replacement_strategy', 'repair_policy'):
            config_dict[name] = getattr(self, name).value
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'GAConfig':
        """Create config from dictionary."""
        return cls(**config_dict)

    def update(self, **kwargs) -> 'GAConfig':
        """Create a new config with updated values."""
        current_config = self.to_dict()
        current_config.update(kwargs)
        return self.from_dict(current_config)
