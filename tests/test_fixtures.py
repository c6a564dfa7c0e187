"""
Test Fixtures and Utilities for GA Tests

Provides toy problem evaluators, a scripted random stream and helper
functions shared by the component and integration tests.
"""

import os
import sys
import tempfile
import shutil
from typing import List, Optional

# Add project root and src to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

from ga_config import GAConfig
from ga_context import GAContext
from ga_logging import get_logger
from ga_types import Solution
from ga_components.evaluation import BinaryProblemEvaluator, EvaluationEngine


class SumOfIndicesEvaluator(BinaryProblemEvaluator):
    """Always feasible; cost is the sum of the selected indices."""

    def evaluate_cost(self, elements: List[int]) -> float:
        return float(sum(elements))


class CardinalityLimitedEvaluator(BinaryProblemEvaluator):
    """
    Maximizes the number of selected elements, up to max_items.

    Selections above the limit are infeasible; the forbidden value is the
    highest selected index.
    """

    def __init__(self, size: int, max_items: int, infeasible_fitness: float = -5000.0):
        super().__init__(size, infeasible_fitness)
        self.max_items = max_items

    def evaluate_cost(self, elements: List[int]) -> float:
        return float(len(elements))

    def is_feasible(self, solution: Solution) -> bool:
        return solution.size <= self.max_items

    def find_forbidden_value(self, solution: Solution) -> Optional[int]:
        if self.is_feasible(solution):
            return None
        return solution.elements[-1]


class NeverFeasibleEvaluator(BinaryProblemEvaluator):
    """Every chromosome is infeasible, so repair can never succeed."""

    def evaluate_cost(self, elements: List[int]) -> float:
        return float(len(elements))

    def is_feasible(self, solution: Solution) -> bool:
        return False


class StuckForbiddenEvaluator(BinaryProblemEvaluator):
    """Keeps reporting locus 0 as forbidden, even after it was removed."""

    def evaluate_cost(self, elements: List[int]) -> float:
        return 0.0

    def find_forbidden_value(self, solution: Solution) -> Optional[int]:
        return 0


class FixedFitnessEvaluator(BinaryProblemEvaluator):
    """Fitness looked up from a table keyed on the chromosome tuple."""

    def __init__(self, size: int, table: dict, default: float = 0.0):
        super().__init__(size)
        self.table = table
        self.default = default

    def evaluate_cost(self, elements: List[int]) -> float:
        return 0.0

    def fitness(self, chromosome) -> float:
        return self.table.get(tuple(chromosome), self.default)


class WeightedItemsEvaluator(BinaryProblemEvaluator):
    """Built from a list of item weights; cost is the total selected weight."""

    def __init__(self, weights: List[float]):
        super().__init__(len(weights))
        self.weights = list(weights)

    def evaluate_cost(self, elements: List[int]) -> float:
        return float(sum(self.weights[i] for i in elements))


class ScriptedRandom:
    """
    Random stream replaying predetermined draws.

    randrange() pops from the integer script, random() from the float
    script. Running out of draws, or a draw outside randrange's bound,
    fails the test.
    """

    def __init__(self, ints: List[int] = None, floats: List[float] = None):
        self.ints = list(ints or [])
        self.floats = list(floats or [])

    def randrange(self, stop: int) -> int:
        assert self.ints, "Scripted integer draws exhausted"
        value = self.ints.pop(0)
        assert 0 <= value < stop, f"Scripted draw {value} outside [0, {stop})"
        return value

    def random(self) -> float:
        assert self.floats, "Scripted float draws exhausted"
        return self.floats.pop(0)

    def exhausted(self) -> bool:
        return not self.ints and not self.floats


class TestFixtures:
    """Centralized test fixtures and utilities."""

    @staticmethod
    def get_test_config(population_size: int = 4, generations: int = 1,
                        mutation_rate: float = 0.1, **overrides) -> GAConfig:
        """Get test configuration with sensible defaults."""
        params = dict(population_size=population_size,
                      generations=generations,
                      mutation_rate=mutation_rate,
                      verbose=False,
                      output_dir="test_output")
        params.update(overrides)
        return GAConfig(**params)

    @staticmethod
    def create_context(config: GAConfig, rng=None) -> GAContext:
        """Context with an explicit random stream (seeded from config if None)."""
        return GAContext(config=config, rng=rng, logger=get_logger())

    @staticmethod
    def create_engine(evaluator=None) -> EvaluationEngine:
        return EvaluationEngine(evaluator or SumOfIndicesEvaluator(4))

    @staticmethod
    def create_temp_test_dir() -> str:
        """Create temporary test directory and return path."""
        return tempfile.mkdtemp(prefix='ga_test_')

    @staticmethod
    def cleanup_path(path: str):
        """Clean up test files or directories."""
        try:
            if os.path.isfile(path):
                os.unlink(path)
            elif os.path.isdir(path):
                shutil.rmtree(path)
        except OSError:
            pass  # Ignore cleanup errors

    @staticmethod
    def assert_valid_population(population, population_size: int, chromosome_size: int):
        """Assert population shape and binary genes."""
        assert len(population) == population_size, \
            f"Expected {population_size} chromosomes, got {len(population)}"
        for index, chromosome in enumerate(population):
            assert len(chromosome) == chromosome_size, \
                f"Chromosome {index} has length {len(chromosome)}"
            assert all(gene in (0, 1) for gene in chromosome), \
                f"Chromosome {index} has non-binary genes: {chromosome}"


# Global test constants
DEFAULT_TEST_POPULATION_SIZE = 8
DEFAULT_TEST_GENERATIONS = 5
